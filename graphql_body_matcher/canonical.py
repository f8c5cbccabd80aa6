"""Canonical rendering of GraphQL documents for equivalence checks."""

import json
import logging
from decimal import Decimal

from . import document as d

logger = logging.getLogger(__name__)

CanonicalForm = str


def canonicalize(doc: d.Document) -> CanonicalForm:
    """
    Render a document in canonical form.

    Two documents that request the same data render to the same string:
    whitespace, comments, argument order, input-object field order and literal
    spelling are normalised. Selection order, aliases, names and directive
    order are kept as written. Fragment spreads are not inlined.

    Args:
        doc: Parsed document

    Returns:
        Canonical string, compared only by exact equality
    """
    operations = sorted(d.iter_operations(doc), key=lambda op: op.name or "")
    fragments = sorted(d.iter_fragments(doc), key=lambda frag: frag.name)

    parts = [render_operation(op) for op in operations]
    parts.extend(render_fragment(frag) for frag in fragments)
    canonical = " ".join(parts)

    logger.debug("Canonical form: %s", canonical)
    return canonical


def render_operation(op: d.OperationDefinition) -> str:
    out = op.operation
    if op.name:
        out += f" {op.name}"
    if op.variable_definitions:
        variables = sorted(op.variable_definitions, key=lambda var: var.name)
        out += "(" + ",".join(render_variable_definition(var) for var in variables) + ")"
    out += render_directives(op.directives)
    return out + render_selection_set(op.selection_set)


def render_fragment(frag: d.FragmentDefinition) -> str:
    return (
        f"fragment {frag.name} on {frag.type_condition}"
        + render_directives(frag.directives)
        + render_selection_set(frag.selection_set)
    )


def render_variable_definition(var: d.VariableDefinition) -> str:
    out = f"${var.name}:{var.type}"
    if var.default_value is not None:
        out += "=" + render_value(var.default_value)
    return out + render_directives(var.directives)


def render_selection_set(selection_set: d.SelectionSet) -> str:
    if selection_set is None:
        return ""
    # Sibling order is significant
    return "{" + " ".join(render_selection(s) for s in selection_set.selections) + "}"


def render_selection(selection: d.Selection) -> str:
    if isinstance(selection, d.Field):
        out = f"{selection.alias}:{selection.name}" if selection.alias else selection.name
        out += render_arguments(selection.arguments)
        out += render_directives(selection.directives)
        return out + render_selection_set(selection.selection_set)
    if isinstance(selection, d.FragmentSpread):
        return f"...{selection.name}" + render_directives(selection.directives)
    if isinstance(selection, d.InlineFragment):
        out = "..."
        if selection.type_condition:
            out += f" on {selection.type_condition}"
        out += render_directives(selection.directives)
        return out + render_selection_set(selection.selection_set)
    raise TypeError(f"Not a selection: {selection!r}")


def render_arguments(arguments: tuple[d.Argument, ...]) -> str:
    if not arguments:
        return ""
    ordered = sorted(arguments, key=lambda arg: arg.name)
    return "(" + ",".join(f"{arg.name}:{render_value(arg.value)}" for arg in ordered) + ")"


def render_directives(directives: tuple[d.Directive, ...]) -> str:
    return "".join(f"@{directive.name}" + render_arguments(directive.arguments) for directive in directives)


def render_value(value: d.Value) -> str:
    if isinstance(value, d.VariableValue):
        return f"${value.name}"
    if isinstance(value, d.ListValue):
        return "[" + ",".join(render_value(v) for v in value.values) + "]"
    if isinstance(value, d.ObjectValue):
        ordered = sorted(value.fields, key=lambda f: f.name)
        return "{" + ",".join(f"{f.name}:{render_value(f.value)}" for f in ordered) + "}"
    if isinstance(value, d.ScalarValue):
        return render_scalar(value)
    raise TypeError(f"Not a value: {value!r}")


def render_scalar(value: d.ScalarValue) -> str:
    """
    Render a literal as its unique canonical token.

    Ints and floats stay distinct kinds: ``1`` and ``1.0`` never compare equal,
    while ``1.0``, ``1.00`` and ``10e-1`` do.
    """
    if value.kind == "int":
        # Leading zeros are not valid GraphQL, so -0 is the only alternate spelling
        return "0" if value.value == "-0" else value.value
    if value.kind == "float":
        return canonical_float(value.value)
    if value.kind == "string":
        return json.dumps(value.value)
    return value.value


def canonical_float(token: str) -> str:
    """Exact scientific notation with a mandatory fraction, e.g. ``1.5E2``."""
    number = Decimal(token)
    if not number:
        return "0.0E0"
    # normalize() would round to the context precision, so trim zeros by hand
    sign, digits, exponent = number.as_tuple()
    mantissa = "".join(str(digit) for digit in digits).rstrip("0")
    exponent += len(digits) - 1
    return f"{'-' if sign else ''}{mantissa[0]}.{mantissa[1:] or '0'}E{exponent}"
