"""Configuration management for graphql-body-matcher."""

from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from . import utils
from .matcher import GraphqlBodyMatcher
from .payload import build_payload_json


@dataclass
class StubDefinition:
    """Named expected query and variables."""

    name: str
    query: str
    variables: Optional[dict[str, Any]] = None

    def to_json(self) -> str:
        """Expected payload JSON for this stub."""
        variables = utils.compact_json(self.variables) if self.variables is not None else None
        return build_payload_json(self.query, variables)


@dataclass
class Config:
    """Configuration for graphql-body-matcher."""

    log_level: str = "WARNING"
    output: str = "console"
    sticky_overrides: bool = False
    stubs: list[StubDefinition] = field(default_factory=list)


def get_default_config_path() -> str:
    """Get default config file path."""
    return utils.expand_path("~/.graphql-body-matcher/config.yaml")


def load(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with defaults for missing values.

    Raises:
        ValueError: If a stub entry lacks a name or query
    """
    if config_path is None:
        config_path = get_default_config_path()

    # Return defaults if config doesn't exist
    if not utils.exists(config_path):
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    stubs = []
    for i, entry in enumerate(data.get("stubs", [])):
        if not isinstance(entry, dict) or "query" not in entry:
            raise ValueError(f"Stub #{i + 1} in {config_path} has no 'query'")
        stubs.append(
            StubDefinition(
                name=entry.get("name", f"stub-{i + 1}"),
                query=entry["query"],
                variables=entry.get("variables"),
            )
        )

    # Merge with defaults
    return Config(
        log_level=str(data.get("log_level", "WARNING")).upper(),
        output=data.get("output", "console"),
        sticky_overrides=bool(data.get("sticky_overrides", False)),
        stubs=stubs,
    )


def build_matchers(cfg: Config) -> dict[str, GraphqlBodyMatcher]:
    """
    Build one matcher per configured stub.

    Raises:
        InvalidJsonError: If a stub's variables cannot be encoded as a payload
        InvalidQueryError: If a stub's query is invalid
    """
    return {
        stub.name: GraphqlBodyMatcher.with_request_json(stub.to_json(), sticky_overrides=cfg.sticky_overrides)
        for stub in cfg.stubs
    }


def create_example_config(path: Optional[str] = None) -> None:
    """Create an example config file."""
    if path is None:
        path = get_default_config_path()

    utils.ensure_dir(utils.dirname(path))

    example = {
        "log_level": "WARNING",
        "output": "console",
        "sticky_overrides": False,
        "stubs": [
            {"name": "hero", "query": "query { hero { name } }"},
            {
                "name": "hero-by-episode",
                "query": "query Hero($ep: Episode) { hero(episode: $ep) { name } }",
                "variables": {"ep": "JEDI"},
            },
        ],
    }

    with open(path, "w") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)
