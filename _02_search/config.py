"""Search configuration and YAML loading."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from _01_oracle.exceptions import InvalidConfigError

logger = logging.getLogger(__name__)

DEFAULT_EXPLORATION = 1.414


@dataclass(frozen=True)
class SearchConfig:
    """UCT search parameters.

    Attributes:
        exploration: UCT exploration constant C. sqrt(2) is the textbook
            value; 1.414 is what the engine has always shipped with.
        seed: Seed for the engine's random source when none is injected.
        backpropagate_terminal: When selection ends on a terminal leaf,
            backpropagate its known outcome instead of skipping the iteration.
    """

    exploration: float = DEFAULT_EXPLORATION
    seed: Optional[int] = None
    backpropagate_terminal: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.exploration, bool) or not isinstance(self.exploration, (int, float)):
            raise InvalidConfigError(f"exploration must be a number, got {self.exploration!r}")
        if not self.exploration > 0:
            raise InvalidConfigError(f"exploration must be positive, got {self.exploration}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise InvalidConfigError(f"seed must be an integer or null, got {self.seed!r}")
        if not isinstance(self.backpropagate_terminal, bool):
            raise InvalidConfigError(
                f"backpropagate_terminal must be true or false, got {self.backpropagate_terminal!r}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchConfig:
        """Create configuration from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known_fields)
        if unknown:
            logger.warning("Ignoring unknown search config keys: %s", ", ".join(unknown))
        filtered_data = {k: v for k, v in data.items() if k in known_fields}
        return cls(**filtered_data)


def load_config_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load a configuration mapping from a YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Dictionary of configuration parameters (empty for an empty file).

    Raises:
        InvalidConfigError: If the file is missing, unparsable or not a mapping.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise InvalidConfigError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise InvalidConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise InvalidConfigError(f"Config file {config_path} must contain a mapping")
    return config


def search_section(data: dict[str, Any]) -> dict[str, Any]:
    """Return the search parameters from a loaded config mapping.

    Parameters may sit at the top level or under a `search` key; an empty
    `search:` section means defaults.

    Raises:
        InvalidConfigError: If `search` holds something other than a mapping.
    """
    if "search" not in data:
        return dict(data)
    section = data["search"]
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise InvalidConfigError(f"search section must be a mapping, got {section!r}")
    return dict(section)


def load_config(path: str | Path) -> SearchConfig:
    """Read a `SearchConfig` from YAML."""
    return SearchConfig.from_dict(search_section(load_config_from_yaml(path)))


__all__ = ["DEFAULT_EXPLORATION", "SearchConfig", "load_config", "load_config_from_yaml", "search_section"]
