"""Storage backend interface for item registries."""

from abc import ABC, abstractmethod

from item_editor.models import Item


class Backend(ABC):
    """Abstract base class for item storage backends.

    Implementations raise ``LoadError`` when items cannot be listed and
    ``WriteError`` when a create, update or delete is rejected.
    """

    @abstractmethod
    def list_items(self, recursive: bool = False) -> list[Item]:
        """List all items.

        Args:
            recursive: Whether group members should be expanded inline
        """
        pass

    @abstractmethod
    def create(self, name: str, item: Item) -> Item:
        """Create the item, or replace it if one with this name exists."""
        pass

    @abstractmethod
    def remove(self, name: str) -> None:
        """Remove an item by name."""
        pass
