"""Semantic matcher for GraphQL request bodies."""

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

import requests

from . import utils
from .canonical import CanonicalForm, canonicalize
from .exceptions import GraphqlMatcherError, InvalidJsonError, InvalidQueryError, ParseError, Side
from .parser import parse_query
from .payload import RequestPayload, build_payload_json, load_payload, payload_from_mapping
from .variables import variables_equal

logger = logging.getLogger(__name__)

NAME = "graphql-body-matcher"
EXPECTED_QUERY_PARAMETER = "expectedQuery"

Body = Union[str, bytes, bytearray]


class MatchVerdict(Enum):
    """Outcome of a match. There are no partial matches."""

    EXACT_MATCH = "exact_match"
    NO_MATCH = "no_match"

    @property
    def is_exact_match(self) -> bool:
        return self is MatchVerdict.EXACT_MATCH


@dataclass(frozen=True)
class CanonicalPayload:
    """Validated payload with its canonical query; a matcher retains one as its expected state."""

    payload: RequestPayload
    canonical: CanonicalForm


@dataclass
class MatchReport:
    """Details of a single match decision."""

    verdict: MatchVerdict
    query_matches: bool
    variables_match: bool
    request_canonical: CanonicalForm
    expected_canonical: CanonicalForm
    request_variables: dict[str, Any] = field(default_factory=dict)
    expected_variables: dict[str, Any] = field(default_factory=dict)


def load_expected(expected: Union[Body, Mapping[str, Any]], side: Side = "expected") -> CanonicalPayload:
    """
    Load, validate and canonicalize an expected payload.

    Args:
        expected: JSON text with a "query" field and optional "variables", or
            the same payload already decoded into a mapping
        side: Side reported in errors

    Returns:
        CanonicalPayload

    Raises:
        InvalidJsonError: If the JSON is malformed or has no "query" string
        InvalidQueryError: If the query does not parse
    """
    if isinstance(expected, Mapping):
        payload = payload_from_mapping(expected, side)
    elif isinstance(expected, (str, bytes, bytearray)):
        payload = load_payload(expected, side)
    else:
        raise InvalidJsonError(f"Expected JSON text or a mapping, got {type(expected).__name__}", side)
    if payload.query is None:
        raise InvalidJsonError(f"Missing 'query' field in the provided JSON string: {payload.raw}", side)

    try:
        doc = parse_query(payload.query)
    except ParseError as e:
        raise InvalidQueryError(f"Failed to parse the provided GraphQL query: {payload.query}", side) from e

    return CanonicalPayload(payload=payload, canonical=canonicalize(doc))


def load_request(body: Body) -> CanonicalPayload:
    """
    Load and canonicalize an incoming request body.

    Raises:
        InvalidJsonError: If the body is not a JSON object
        InvalidQueryError: If "query" is missing or does not parse
    """
    payload = load_payload(body, "request")
    if payload.query is None:
        raise InvalidQueryError(f"Invalid request query: missing 'query' field in {payload.raw}", "request")

    try:
        doc = parse_query(payload.query)
    except ParseError as e:
        raise InvalidQueryError(f"Invalid request query: {e}: {payload.query}", "request") from e

    return CanonicalPayload(payload=payload, canonical=canonicalize(doc))


class GraphqlBodyMatcher:
    """
    Matches request bodies against an expected GraphQL query and variables.

    Build one with ``with_request_query_and_variables`` or ``with_request_json``;
    both validate eagerly so a bad fixture fails at construction.

    An ``expectedQuery`` invocation parameter overrides the expected payload for
    that call only. With ``sticky_overrides=True`` the override replaces the
    retained expected payload for every later call as well. Reads and
    replacements of the retained payload hold a lock, so each call sees one
    complete payload; which override a later call sees still depends on the
    order concurrent callers arrive in.
    """

    def __init__(self, expected: CanonicalPayload, sticky_overrides: bool = False):
        self._expected = expected
        self.sticky_overrides = sticky_overrides
        self._lock = threading.Lock()

    @classmethod
    def with_request_query_and_variables(
        cls, expected_query: str, expected_variables: Optional[str] = None, **kwargs
    ) -> "GraphqlBodyMatcher":
        """
        Create a matcher from a GraphQL query string and optional variables JSON text.

        Raises:
            InvalidJsonError: If the variables text is malformed
            InvalidQueryError: If the query is invalid
        """
        return cls.with_request_json(build_payload_json(expected_query, expected_variables), **kwargs)

    @classmethod
    def with_request_json(cls, expected_json: Body, **kwargs) -> "GraphqlBodyMatcher":
        """
        Create a matcher from a raw JSON payload ``{"query": ..., "variables": ...}``.

        Raises:
            InvalidJsonError: If the JSON is malformed or lacks "query"
            InvalidQueryError: If the query is invalid
        """
        expected = load_expected(expected_json)
        logger.debug("Expected query: %s", expected.canonical)
        return cls(expected, **kwargs)

    @property
    def name(self) -> str:
        return NAME

    @property
    def expected(self) -> CanonicalPayload:
        with self._lock:
            return self._expected

    def match(self, body: Body, parameters: Optional[Mapping[str, Any]] = None) -> MatchVerdict:
        """
        Decide whether a request body matches the expected query and variables.

        Args:
            body: Raw request body
            parameters: Invocation parameters; may hold "expectedQuery" JSON text

        Returns:
            MatchVerdict.EXACT_MATCH or MatchVerdict.NO_MATCH

        Raises:
            InvalidJsonError: If the request or override JSON is malformed
            InvalidQueryError: If the request or expected query is missing or invalid
        """
        return self.explain(body, parameters).verdict

    def explain(self, body: Body, parameters: Optional[Mapping[str, Any]] = None) -> MatchReport:
        """Same as ``match`` but returns the full MatchReport."""
        try:
            request = load_request(body)
            expected = self._resolve_expected(parameters or {})
        except GraphqlMatcherError as e:
            logger.warning("Cannot match request body: %s", e)
            raise

        query_matches = request.canonical == expected.canonical
        variables_match = variables_equal(request.payload.variables, expected.payload.variables)
        verdict = MatchVerdict.EXACT_MATCH if query_matches and variables_match else MatchVerdict.NO_MATCH

        logger.debug(
            "%s: query_matches=%s variables_match=%s", verdict.name, query_matches, variables_match
        )
        return MatchReport(
            verdict=verdict,
            query_matches=query_matches,
            variables_match=variables_match,
            request_canonical=request.canonical,
            expected_canonical=expected.canonical,
            request_variables=request.payload.variables,
            expected_variables=expected.payload.variables,
        )

    def _resolve_expected(self, parameters: Mapping[str, Any]) -> CanonicalPayload:
        if EXPECTED_QUERY_PARAMETER not in parameters:
            with self._lock:
                return self._expected

        expected = load_expected(parameters[EXPECTED_QUERY_PARAMETER])
        if self.sticky_overrides:
            with self._lock:
                self._expected = expected
            logger.debug("Retained expected query replaced by override: %s", expected.canonical)
        return expected

    def request_matcher(self) -> Callable[[requests.PreparedRequest], tuple[bool, str]]:
        """
        Adapt this matcher to the ``(request) -> (matched, reason)`` protocol.

        This is the shape of custom body matchers in requests-based mocking
        libraries such as ``responses``, which call them with the outgoing
        ``requests.PreparedRequest``. Only the request ``body`` is read. Invalid
        bodies do not match; the reason holds the error.
        """

        def match_request(request: requests.PreparedRequest) -> tuple[bool, str]:
            try:
                report = self.explain(request.body or "")
            except GraphqlMatcherError as e:
                return False, str(e)

            if report.verdict.is_exact_match:
                return True, ""
            reasons = []
            if not report.query_matches:
                reasons.append(f"query {report.request_canonical} doesn't match {report.expected_canonical}")
            if not report.variables_match:
                reasons.append(
                    f"variables {utils.compact_json(report.request_variables)} "
                    f"doesn't match {utils.compact_json(report.expected_variables)}"
                )
            return False, "; ".join(reasons)

        match_request.__name__ = NAME
        return match_request

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.expected.canonical!r})"
