"""GraphQL parsing into the internal document model."""

import logging
from typing import Optional

from graphql import (
    BooleanValueNode,
    DirectiveNode,
    DocumentNode,
    EnumValueNode,
    FieldNode,
    FloatValueNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLError,
    InlineFragmentNode,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    ObjectValueNode,
    OperationDefinitionNode,
    SelectionSetNode,
    StringValueNode,
    VariableNode,
    parse,
    print_ast,
)

from . import document as d
from .exceptions import ParseError

logger = logging.getLogger(__name__)


def parse_query(source: str) -> d.Document:
    """
    Parse GraphQL query string into a Document.

    Args:
        source: GraphQL query string

    Returns:
        Document built from the graphql-core AST

    Raises:
        ParseError: If query is syntactically invalid or is not an executable document
    """
    try:
        native = parse(source, no_location=True)
    except GraphQLError as e:
        logger.debug("GraphQL syntax error: %s", e.message)
        raise ParseError(f"Invalid GraphQL document: {e.message}", source) from e

    return convert_document(native, source)


def convert_document(native: DocumentNode, source: str = "") -> d.Document:
    """
    Convert a graphql-core DocumentNode into a Document.

    Raises:
        ParseError: If the document holds type system definitions
    """
    definitions = []
    for definition in native.definitions:
        if isinstance(definition, OperationDefinitionNode):
            definitions.append(_operation(definition))
        elif isinstance(definition, FragmentDefinitionNode):
            definitions.append(_fragment(definition))
        else:
            raise ParseError(
                f"Unsupported definition '{definition.kind}': only operations and fragments can be matched",
                source,
            )
    return d.Document(definitions=tuple(definitions))


def _name(node) -> Optional[str]:
    return node.name.value if node.name else None


def _operation(node: OperationDefinitionNode) -> d.OperationDefinition:
    return d.OperationDefinition(
        operation=node.operation.value,
        name=_name(node),
        variable_definitions=tuple(
            d.VariableDefinition(
                name=var.variable.name.value,
                type=print_ast(var.type),
                default_value=_value(var.default_value) if var.default_value else None,
                directives=_directives(var.directives),
            )
            for var in node.variable_definitions or ()
        ),
        directives=_directives(node.directives),
        selection_set=_selection_set(node.selection_set),
    )


def _fragment(node: FragmentDefinitionNode) -> d.FragmentDefinition:
    return d.FragmentDefinition(
        name=node.name.value,
        type_condition=node.type_condition.name.value,
        directives=_directives(node.directives),
        selection_set=_selection_set(node.selection_set),
    )


def _selection_set(node: SelectionSetNode):
    if node is None:
        return None
    return d.SelectionSet(selections=tuple(_selection(s) for s in node.selections))


def _selection(node) -> d.Selection:
    if isinstance(node, FieldNode):
        return d.Field(
            name=node.name.value,
            alias=node.alias.value if node.alias else None,
            arguments=_arguments(node.arguments),
            directives=_directives(node.directives),
            selection_set=_selection_set(node.selection_set),
        )
    if isinstance(node, FragmentSpreadNode):
        return d.FragmentSpread(name=node.name.value, directives=_directives(node.directives))
    if isinstance(node, InlineFragmentNode):
        return d.InlineFragment(
            type_condition=node.type_condition.name.value if node.type_condition else None,
            directives=_directives(node.directives),
            selection_set=_selection_set(node.selection_set),
        )
    raise TypeError(f"Unexpected selection node: {node.kind}")


def _arguments(nodes) -> tuple[d.Argument, ...]:
    return tuple(d.Argument(name=arg.name.value, value=_value(arg.value)) for arg in nodes or ())


def _directives(nodes: list[DirectiveNode]) -> tuple[d.Directive, ...]:
    return tuple(
        d.Directive(name=directive.name.value, arguments=_arguments(directive.arguments))
        for directive in nodes or ()
    )


def _value(node) -> d.Value:
    if isinstance(node, VariableNode):
        return d.VariableValue(name=node.name.value)
    if isinstance(node, IntValueNode):
        return d.ScalarValue(kind="int", value=node.value)
    if isinstance(node, FloatValueNode):
        return d.ScalarValue(kind="float", value=node.value)
    if isinstance(node, StringValueNode):
        # Block strings arrive already dedented
        return d.ScalarValue(kind="string", value=node.value)
    if isinstance(node, BooleanValueNode):
        return d.ScalarValue(kind="boolean", value="true" if node.value else "false")
    if isinstance(node, NullValueNode):
        return d.ScalarValue(kind="null", value="null")
    if isinstance(node, EnumValueNode):
        return d.ScalarValue(kind="enum", value=node.value)
    if isinstance(node, ListValueNode):
        return d.ListValue(values=tuple(_value(v) for v in node.values))
    if isinstance(node, ObjectValueNode):
        return d.ObjectValue(
            fields=tuple(d.ObjectField(name=f.name.value, value=_value(f.value)) for f in node.fields)
        )
    raise TypeError(f"Unexpected value node: {node.kind}")
