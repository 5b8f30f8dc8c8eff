"""Item source for CardaSort.

Loads items from JSON or YAML files and narrows them down by category and
tags, the same selection the web app offers before a sort starts.
"""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import DuplicateItemIdentifierError, ItemSourceError
from .models import Item

YAML_SUFFIXES = {".yaml", ".yml"}


class ItemFilter(BaseModel):
    """Selects the items that take part in a sort.

    Attributes:
        category_id: Keep only items in this category (None keeps all).
        tag_names: Keep only items carrying at least one of these tags
            (empty keeps all).
    """

    category_id: int | None = None
    tag_names: list[str] = Field(default_factory=list)

    def matches(self, item: Item) -> bool:
        if self.category_id is not None and item.category_id != self.category_id:
            return False
        if self.tag_names and not set(item.tag_names) & set(self.tag_names):
            return False
        return True

    def apply(self, items: Iterable[Item]) -> list[Item]:
        return [item for item in items if self.matches(item)]


def ensure_unique_ids(items: Iterable[Item]) -> None:
    """Raise DuplicateItemIdentifierError if any id repeats."""
    counts = Counter(item.id for item in items)
    duplicates = [item_id for item_id, count in counts.items() if count > 1]
    if duplicates:
        raise DuplicateItemIdentifierError(duplicates)


def parse_items(data: Any, source: str | None = None) -> list[Item]:
    """Build items from decoded JSON/YAML data.

    Accepts a list of item mappings, or a mapping with an ``items`` list.
    """
    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        raise ItemSourceError(
            "Expected a list of items or a mapping with an 'items' list.",
            path=source,
        )
    try:
        return [Item.model_validate(entry) for entry in data]
    except ValidationError as e:
        raise ItemSourceError(f"Invalid item data: {e}", path=source) from e


def load_items(path: str | Path) -> list[Item]:
    """Load items from a JSON or YAML file.

    Raises:
        ItemSourceError: If the file is missing, unreadable or malformed.
    """
    path = Path(path)
    if not path.exists():
        raise ItemSourceError(f"File not found: {path}", path=str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ItemSourceError(f"Could not read file: {e}", path=str(path)) from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ItemSourceError(f"Could not parse file: {e}", path=str(path)) from e

    return parse_items(data, source=str(path))
