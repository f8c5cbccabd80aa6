"""GraphQL request payloads: ``{"query": ..., "variables": ...}`` JSON bodies."""

import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from .exceptions import InvalidJsonError, Side


@dataclass(frozen=True)
class RequestPayload:
    """Decoded GraphQL request body."""

    query: Optional[str]
    variables: dict[str, Any] = field(default_factory=dict)
    raw: str = ""


def decode_body(body: Union[str, bytes, bytearray, None]) -> str:
    """Decode a request body to text (UTF-8 for bytes, empty for None)."""
    if body is None:
        return ""
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8")
    return body


def load_payload(text: Union[str, bytes], side: Side) -> RequestPayload:
    """
    Decode a JSON payload.

    Numbers are decoded as Decimal so variable values compare exactly and
    integers of any length are accepted. A missing or non-string ``query``
    yields ``query=None``; callers decide which error that is.

    Args:
        text: Raw JSON text or bytes
        side: Which side of the match the text belongs to

    Returns:
        RequestPayload

    Raises:
        InvalidJsonError: If text is not a JSON object, or variables is not an object
    """
    try:
        raw = decode_body(text)
        data = json.loads(raw, parse_float=Decimal, parse_int=Decimal)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise InvalidJsonError(f"Failed to parse the provided JSON string: {text!r}", side) from e

    if not isinstance(data, dict):
        raise InvalidJsonError(f"Expected a JSON object with a 'query' field: {raw}", side)
    return payload_from_mapping(data, side, raw)


def payload_from_mapping(data: Mapping[str, Any], side: Side, raw: str = "") -> RequestPayload:
    """
    Build a payload from an already decoded ``{"query": ..., "variables": ...}`` mapping.

    Values are taken as they are; nothing is re-encoded.

    Raises:
        InvalidJsonError: If variables is present and not a mapping
    """
    variables = data.get("variables")
    if variables is None:
        variables = {}
    elif not isinstance(variables, Mapping):
        raise InvalidJsonError(f"'variables' must be a JSON object: {raw or data!r}", side)

    query = data.get("query")
    return RequestPayload(
        query=query if isinstance(query, str) else None,
        variables=dict(variables),
        raw=raw or repr(data),
    )


def build_payload_json(query: str, variables: Optional[str] = None) -> str:
    """
    Build a payload JSON text from a query string and optional variables JSON text.

    The query is JSON-quoted; the variables text is embedded verbatim so that
    malformed variables surface when the payload is loaded.
    """
    variables_json = f', "variables": {variables}' if variables is not None else ""
    return f'{{"query": {json.dumps(query)}{variables_json}}}'
