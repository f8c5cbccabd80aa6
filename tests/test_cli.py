"""
Tests for the graphql-body-matcher CLI.
"""

import json

import pytest
from typer.testing import CliRunner

from graphql_body_matcher.cli import EXIT_INVALID, EXIT_MATCH, EXIT_NO_MATCH, app

runner = CliRunner()


@pytest.fixture
def no_config(tmp_path) -> list[str]:
    """Point commands at a config file that does not exist."""
    return ["--config", str(tmp_path / "absent.yaml")]


class TestMatchCommand:
    """Test `match`."""

    def test_match_json(self, write_file, hero_json, hero_body, no_config):
        expected = write_file("expected.json", hero_json)
        request = write_file("request.json", hero_body)

        result = runner.invoke(app, ["match", expected, request, "--output", "json", *no_config])

        assert result.exit_code == EXIT_MATCH
        data = json.loads(result.stdout)
        assert data["verdict"] == "exact_match"
        assert data["request_query"] == "query{hero{name}}"

    def test_no_match_json(self, write_file, hero_json, no_config):
        expected = write_file("expected.json", hero_json)
        request = write_file("request.json", '{"query": "{ hero { name } }", "variables": {"x": 1.5}}')

        result = runner.invoke(app, ["match", expected, request, "--output", "json", *no_config])

        assert result.exit_code == EXIT_NO_MATCH
        data = json.loads(result.stdout)
        assert data["verdict"] == "no_match"
        assert data["query_matches"] is True
        assert data["variables_match"] is False
        assert data["request_variables"] == {"x": 1.5}

    def test_console_output(self, write_file, hero_json, hero_body, no_config):
        expected = write_file("expected.json", hero_json)
        request = write_file("request.json", hero_body)

        result = runner.invoke(app, ["match", expected, request, *no_config])

        assert result.exit_code == EXIT_MATCH
        assert "Exact match" in result.stdout

    def test_invalid_expected(self, write_file, hero_body, no_config):
        expected = write_file("expected.json", '{"query": "{ hero { "}')
        request = write_file("request.json", hero_body)

        result = runner.invoke(app, ["match", expected, request, *no_config])

        assert result.exit_code == EXIT_INVALID
        assert "Failed to parse the provided GraphQL query" in result.stdout

    def test_missing_file(self, tmp_path, hero_json, write_file, no_config):
        expected = write_file("expected.json", hero_json)

        result = runner.invoke(app, ["match", expected, str(tmp_path / "nope.json"), *no_config])

        assert result.exit_code == EXIT_INVALID


class TestCanonicalCommand:
    """Test `canonical`."""

    def test_prints_canonical_form(self, write_file):
        query = write_file("query.graphql", "query Q {\n  b: hero(id: 1.00) { name }\n}\n")

        result = runner.invoke(app, ["canonical", query])

        assert result.exit_code == 0
        assert result.stdout.strip() == "query Q{b:hero(id:1.0E0){name}}"

    def test_invalid_query(self, write_file):
        query = write_file("query.graphql", "{ hero { ")

        result = runner.invoke(app, ["canonical", query])

        assert result.exit_code == EXIT_INVALID


class TestStubsCommand:
    """Test `stubs`."""

    def test_reports_matching_stub(self, write_file):
        cfg = write_file(
            "config.yaml",
            'stubs:\n  - name: hero\n    query: "{ hero { name } }"\n  - name: villain\n    query: "{ villain { name } }"\n',
        )
        request = write_file("request.json", '{"query": "query {\\n  villain { name }\\n}"}')

        result = runner.invoke(app, ["stubs", request, "--config", cfg, "--output", "json"])

        assert result.exit_code == EXIT_MATCH
        assert json.loads(result.stdout) == {"matches": ["villain"], "stubs": {"hero": False, "villain": True}}

    def test_no_stubs(self, write_file, hero_body, no_config):
        request = write_file("request.json", hero_body)

        result = runner.invoke(app, ["stubs", request, *no_config])

        assert result.exit_code == EXIT_NO_MATCH
        assert "No stubs configured" in result.stdout


class TestInitConfigCommand:
    """Test `init-config`."""

    def test_writes_config(self, tmp_path):
        path = tmp_path / "config.yaml"

        result = runner.invoke(app, ["init-config", "--path", str(path)])

        assert result.exit_code == 0
        assert path.exists()

    def test_refuses_to_overwrite(self, write_file):
        path = write_file("config.yaml", "stubs: []\n")

        result = runner.invoke(app, ["init-config", "--path", path])

        assert result.exit_code == EXIT_INVALID
