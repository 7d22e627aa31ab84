"""Item listing and the confirm-then-remove flow."""

import copy
from collections.abc import Iterator
from dataclasses import dataclass, field

import structlog

from item_editor.backend import Backend
from item_editor.icons import resolve_icon
from item_editor.models import Item
from item_editor.notify import DirtyNotifier, Notifier

logger = structlog.get_logger()

REMOVED_MESSAGE = "Item removed."


class ItemListing:
    """Read-only list of the registry's items."""

    def __init__(self, backend: Backend) -> None:
        self.backend = backend
        self.items: tuple[Item, ...] = ()

    def refresh(self) -> tuple[Item, ...]:
        """Reload the item list from the backend."""
        self.items = tuple(self.backend.list_items(recursive=False))
        logger.debug("Item listing refreshed", count=len(self.items))
        return self.items

    def entries(self) -> Iterator[tuple[Item, str]]:
        """Yield each item with its icon path."""
        for item in self.items:
            yield item, resolve_icon(item.category, item.type)


@dataclass
class RemovalDialog:
    """Confirmation step for removing a single item.

    The dialog holds its own copy of the item, and removing it does not
    refresh any listing. Callers refresh after a confirmed removal.
    """

    item: Item
    closed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.item = copy.deepcopy(self.item)

    def confirm(self, backend: Backend, notifier: Notifier, dirty: DirtyNotifier) -> None:
        """Remove the item.

        Raises:
            WriteError: If the backend rejects the removal
        """
        logger.info("Removing item", name=self.item.name)
        try:
            backend.remove(self.item.name)
        finally:
            self.closed = True
        dirty.mark_dirty()
        notifier.show_message(REMOVED_MESSAGE)

    def cancel(self) -> None:
        """Close the dialog without removing anything."""
        logger.debug("Removal cancelled", name=self.item.name)
        self.closed = True
