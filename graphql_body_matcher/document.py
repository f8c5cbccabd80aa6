"""Parser-independent GraphQL document model."""

from dataclasses import dataclass, field
from typing import Literal, Optional, Union

OperationType = Literal["query", "mutation", "subscription"]
ScalarKind = Literal["int", "float", "string", "boolean", "null", "enum"]


# Values
@dataclass(frozen=True)
class ScalarValue:
    """Literal value. ``value`` keeps the token text; strings are already decoded."""

    kind: ScalarKind
    value: str


@dataclass(frozen=True)
class VariableValue:
    name: str


@dataclass(frozen=True)
class ListValue:
    values: tuple["Value", ...] = ()


@dataclass(frozen=True)
class ObjectField:
    name: str
    value: "Value"


@dataclass(frozen=True)
class ObjectValue:
    fields: tuple[ObjectField, ...] = ()


Value = Union[ScalarValue, VariableValue, ListValue, ObjectValue]


# Arguments & directives
@dataclass(frozen=True)
class Argument:
    name: str
    value: Value


@dataclass(frozen=True)
class Directive:
    name: str
    arguments: tuple[Argument, ...] = ()


# Selections
@dataclass(frozen=True)
class Field:
    """Field selection, optionally aliased."""

    name: str
    alias: Optional[str] = None
    arguments: tuple[Argument, ...] = ()
    directives: tuple[Directive, ...] = ()
    selection_set: Optional["SelectionSet"] = None


@dataclass(frozen=True)
class FragmentSpread:
    name: str
    directives: tuple[Directive, ...] = ()


@dataclass(frozen=True)
class InlineFragment:
    type_condition: Optional[str] = None
    directives: tuple[Directive, ...] = ()
    selection_set: Optional["SelectionSet"] = None


Selection = Union[Field, FragmentSpread, InlineFragment]


@dataclass(frozen=True)
class SelectionSet:
    """Ordered selections. Order is significant and never changed."""

    selections: tuple[Selection, ...] = ()


# Definitions
@dataclass(frozen=True)
class VariableDefinition:
    """Variable declaration; ``type`` is the printed type reference, e.g. ``[ID!]!``."""

    name: str
    type: str
    default_value: Optional[Value] = None
    directives: tuple[Directive, ...] = ()


@dataclass(frozen=True)
class OperationDefinition:
    operation: OperationType
    selection_set: SelectionSet
    name: Optional[str] = None
    variable_definitions: tuple[VariableDefinition, ...] = ()
    directives: tuple[Directive, ...] = ()


@dataclass(frozen=True)
class FragmentDefinition:
    name: str
    type_condition: str
    selection_set: SelectionSet
    directives: tuple[Directive, ...] = ()


Definition = Union[OperationDefinition, FragmentDefinition]


@dataclass(frozen=True)
class Document:
    """One executable GraphQL document."""

    definitions: tuple[Definition, ...] = field(default_factory=tuple)


# Traversal helpers
def iter_operations(doc: Document):
    """Iterate over all operations in document."""
    for definition in doc.definitions:
        if isinstance(definition, OperationDefinition):
            yield definition


def iter_fragments(doc: Document):
    """Iterate over all fragment definitions in document."""
    for definition in doc.definitions:
        if isinstance(definition, FragmentDefinition):
            yield definition
