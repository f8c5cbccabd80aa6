"""Errors raised while building matchers and matching request bodies."""

from typing import Literal, Optional

Side = Literal["request", "expected"]


class GraphqlMatcherError(Exception):
    """Base class for graphql-body-matcher errors."""


class ParseError(GraphqlMatcherError):
    """Query text is not a valid executable GraphQL document."""

    def __init__(self, message: str, source: str):
        super().__init__(message)
        self.source = source


class InvalidJsonError(GraphqlMatcherError):
    """
    JSON payload is malformed or lacks a required field.

    Raised at construction for the expected payload, and at match time for
    whichever side carries the offending text.
    """

    def __init__(self, message: str, side: Optional[Side] = None):
        super().__init__(message)
        self.side = side


class InvalidQueryError(GraphqlMatcherError):
    """The ``query`` of a payload is missing or does not parse as GraphQL."""

    def __init__(self, message: str, side: Optional[Side] = None):
        super().__init__(message)
        self.side = side
