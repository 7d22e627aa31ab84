"""Local backend keeping items in a YAML file."""

from pathlib import Path
from typing import Any

import structlog
import yaml

from item_editor.backend import Backend
from item_editor.errors import LoadError, WriteError
from item_editor.models import Item

logger = structlog.get_logger()


class YamlFileBackend(Backend):
    """Backend storing items as a list under ``items:`` in a YAML file.

    Functions are stored in their wire form (``THRESHOLD_10_20``).
    """

    def __init__(self, path: str | Path = "items.yaml") -> None:
        """Initialize YAML file backend.

        Args:
            path: Path to the items file; it is created on first write
        """
        self.path = Path(path)
        logger.debug("YAML backend initialized", path=str(self.path))

    def _load(self) -> dict[str, Item]:
        """Load items keyed by name, keeping file order."""
        if not self.path.exists():
            logger.debug("Items file does not exist, starting empty", path=str(self.path))
            return {}

        try:
            with open(self.path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load items", path=str(self.path), error=str(e))
            raise LoadError(f"Failed to load items from {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("items", []), list):
            raise LoadError(f"Items file {self.path} must contain an 'items' list")
        items = {}
        for entry in data.get("items") or []:
            item = self._entry_to_item(entry)
            items[item.name] = item
        return items

    def _save(self, items: dict[str, Item]) -> None:
        """Write all items back to the file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                yaml.safe_dump(
                    {"items": [self._item_to_entry(item) for item in items.values()]},
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                )
        except OSError as e:
            logger.error("Failed to save items", path=str(self.path), error=str(e))
            raise WriteError(f"Failed to save items to {self.path}: {e}") from e
        logger.debug("Items saved", path=str(self.path), count=len(items))

    def _entry_to_item(self, entry: Any) -> Item:
        if not isinstance(entry, dict) or not entry.get("name"):
            raise LoadError(f"Invalid item entry in {self.path}: {entry!r}")
        return Item(
            name=str(entry["name"]),
            type=entry.get("type", ""),
            group_type=entry.get("group_type"),
            category=entry.get("category"),
            label=entry.get("label") or "",
            tags=entry.get("tags") or [],
            group_names=entry.get("group_names") or [],
            function=entry.get("function"),
        )

    def _item_to_entry(self, item: Item) -> dict[str, Any]:
        entry: dict[str, Any] = {"name": item.name, "type": item.type}
        if item.group_type:
            entry["group_type"] = item.group_type
        if item.function:
            entry["function"] = item.function
        if item.category:
            entry["category"] = item.category
        if item.label:
            entry["label"] = item.label
        if item.tags:
            entry["tags"] = item.tags
        if item.group_names:
            entry["group_names"] = item.group_names
        return entry

    def list_items(self, recursive: bool = False) -> list[Item]:
        """List items in file order."""
        logger.info("Listing items", path=str(self.path))
        return list(self._load().values())

    def create(self, name: str, item: Item) -> Item:
        """Add the item, replacing any existing item with the same name."""
        logger.info("Writing item", name=name, path=str(self.path))
        if name != item.name:
            raise WriteError(f"Item name {item.name} does not match {name}")
        try:
            items = self._load()
        except LoadError as e:
            raise WriteError(str(e)) from e
        items[name] = item
        self._save(items)
        return item

    def remove(self, name: str) -> None:
        """Remove an item by name."""
        logger.info("Removing item", name=name, path=str(self.path))
        try:
            items = self._load()
        except LoadError as e:
            raise WriteError(str(e)) from e
        if name not in items:
            raise WriteError(f"Item not found: {name}")
        del items[name]
        self._save(items)
