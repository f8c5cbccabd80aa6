"""
Shared test fixtures for the graphql-body-matcher test suite.
"""

import json
from pathlib import Path

import pytest

HERO_QUERY = "query { hero { name } }"
HERO_QUERY_PRETTY = "query {\n  hero {\n    name\n  }\n}"


@pytest.fixture
def hero_json() -> str:
    """Expected payload without variables."""
    return json.dumps({"query": HERO_QUERY})


@pytest.fixture
def hero_body() -> str:
    """Request body equivalent to hero_json but pretty-printed."""
    return json.dumps({"query": HERO_QUERY_PRETTY})


@pytest.fixture
def write_file(tmp_path: Path):
    """Write text into a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content)
        return str(path)

    return _write
