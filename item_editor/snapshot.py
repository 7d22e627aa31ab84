"""Point-in-time view of the item registry."""

import copy
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from item_editor.models import Item


class ItemSnapshot(Mapping[str, Item]):
    """Read-only mapping from item name to a private copy of the item.

    Items are deep-copied on the way in and on the way out, so nothing a
    caller does to a returned item is visible through the snapshot.
    """

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items = MappingProxyType({item.name: copy.deepcopy(item) for item in items})

    def __getitem__(self, name: str) -> Item:
        return copy.deepcopy(self._items[name])

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def values(self) -> Iterator[Item]:  # type: ignore[override]
        """Iterate over the stored items without copying."""
        return iter(self._items.values())
