"""Shared fixtures for item editor tests."""

import pytest

from item_editor.backend import Backend
from item_editor.errors import WriteError
from item_editor.models import Item
from item_editor.notify import DirtyFlag, RecordingNotifier


class MockBackend(Backend):
    """In-memory backend that records writes."""

    def __init__(self, items: list[Item] | None = None, fail_writes: bool = False) -> None:
        self.items: dict[str, Item] = {item.name: item for item in items or []}
        self.writes: list[tuple[str, Item]] = []
        self.removed: list[str] = []
        self.list_calls = 0
        self.fail_writes = fail_writes

    def list_items(self, recursive: bool = False) -> list[Item]:
        """List items."""
        self.list_calls += 1
        return list(self.items.values())

    def create(self, name: str, item: Item) -> Item:
        """Create or replace an item."""
        if self.fail_writes:
            raise WriteError(f"Failed to write item {name}: 500")
        self.writes.append((name, item))
        self.items[name] = item
        return item

    def remove(self, name: str) -> None:
        """Remove an item."""
        if self.fail_writes or name not in self.items:
            raise WriteError(f"Failed to remove item {name}")
        del self.items[name]
        self.removed.append(name)


def sample_items() -> list[Item]:
    return [
        Item(name="Temp1", type="GroupItem", group_type="Number", function="AVG", label="Temperatures"),
        Item(name="Lights", type="GroupItem", group_type="Switch", function="AND"),
        Item(name="All", type="GroupItem"),
        Item(name="Kitchen_Temp", type="NumberItem", category="temperature", group_names=["Temp1"]),
        Item(name="Kitchen_Light", type="SwitchItem", group_names=["Lights"]),
        Item(name="Hall_Light", type="SwitchItem", group_names=["Lights", "All"]),
    ]


@pytest.fixture
def backend() -> MockBackend:
    """Backend preloaded with a few groups and members."""
    return MockBackend(sample_items())


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def dirty() -> DirtyFlag:
    return DirtyFlag()
