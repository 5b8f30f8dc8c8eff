"""Configuration for CardaSort.

This module provides the Config class for engine and session behaviour, and
SortConfig for describing a complete sort (items, filter, settings) in YAML.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from .exceptions import ConfigError
from .items import ItemFilter, load_items
from .models import Item, RankingStrategy

SEED_ENV_VAR = "CARDASORT_SEED"


class Config(BaseModel):
    """Configuration for a sorting run.

    Attributes:
        seed: Seed for the pair shuffle. None uses OS entropy unless the
            CARDASORT_SEED environment variable is set.
        strict: Raise InvalidStateTransitionError for judgments submitted
            without a current pair, instead of ignoring them.
        ranking_strategy: How rankings are presented ("wins" or "layers").
        large_set_warning: Item count above which a memory warning is logged.
        verbose: Enable verbose output.
    """

    seed: int | None = None
    strict: bool = False
    ranking_strategy: RankingStrategy = RankingStrategy.WINS
    large_set_warning: int = Field(default=300, ge=2)
    verbose: bool = False

    def model_post_init(self, __context: Any) -> None:
        """Load the seed from the environment if not provided."""
        if self.seed is None:
            raw = os.environ.get(SEED_ENV_VAR)
            if raw:
                try:
                    self.seed = int(raw)
                except ValueError as e:
                    raise ConfigError(
                        f"{SEED_ENV_VAR} must be an integer, got '{raw}'",
                        field="seed",
                    ) from e


class SortConfig(BaseModel):
    """A complete sort description, typically loaded from YAML.

    Example YAML:
        ```yaml
        items: ./items.json
        filter:
          category_id: 2
          tag_names: [jazz, soul]
        sorting:
          seed: 7
          ranking_strategy: layers
        ```

    Attributes:
        items: Items to rank (before filtering).
        filter: Which items take part.
        sorting: Engine settings (maps to Config).
    """

    items: list[Item] = Field(default_factory=list)
    filter: ItemFilter = Field(default_factory=ItemFilter)
    sorting: Config = Field(default_factory=Config)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SortConfig:
        """Load a sort description from a YAML file.

        ``items`` may be an inline list or a path to an items file, resolved
        relative to the YAML file.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ValueError: If the YAML is not a mapping.
            ItemSourceError: If a referenced items file cannot be loaded.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Invalid config file: expected dict, got {type(data).__name__}")

        items = data.get("items")
        if isinstance(items, str):
            items_path = Path(items)
            if not items_path.is_absolute():
                items_path = path.parent / items_path
            data["items"] = load_items(items_path)

        return cls(**data)

    def selected_items(self) -> list[Item]:
        """Items left after applying the filter."""
        return self.filter.apply(self.items)
