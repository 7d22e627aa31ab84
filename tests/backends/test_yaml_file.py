"""Tests for the YAML file backend."""

from pathlib import Path

import pytest
import yaml

from item_editor.backends.yaml_file import YamlFileBackend
from item_editor.errors import LoadError, WriteError
from item_editor.models import Item


def test_missing_file_is_empty(tmp_path: Path) -> None:
    """Test a missing file lists no items."""
    backend = YamlFileBackend(tmp_path / "items.yaml")
    assert backend.list_items() == []


def test_create_and_list(tmp_path: Path) -> None:
    """Test written items can be listed again."""
    path = tmp_path / "conf" / "items.yaml"
    backend = YamlFileBackend(path)
    alarm = Item(name="Alarm", type="GroupItem", group_type="Number", function="THRESHOLD_10_20", tags=["Safety"])
    light = Item(name="Hall_Light", type="SwitchItem", group_names=["Alarm"])
    backend.create("Alarm", alarm)
    backend.create("Hall_Light", light)

    assert backend.list_items() == [alarm, light]
    data = yaml.safe_load(path.read_text())
    assert data["items"][0] == {
        "name": "Alarm",
        "type": "GroupItem",
        "group_type": "Number",
        "function": "THRESHOLD_10_20",
        "tags": ["Safety"],
    }


def test_create_replaces_existing(tmp_path: Path) -> None:
    """Test writing an existing name replaces the item in place."""
    backend = YamlFileBackend(tmp_path / "items.yaml")
    backend.create("A", Item(name="A", type="SwitchItem"))
    backend.create("B", Item(name="B", type="SwitchItem"))
    backend.create("A", Item(name="A", type="SwitchItem", label="Changed"))

    items = backend.list_items()
    assert [item.name for item in items] == ["A", "B"]
    assert items[0].label == "Changed"


def test_create_name_mismatch(tmp_path: Path) -> None:
    """Test the item name must match the target name."""
    backend = YamlFileBackend(tmp_path / "items.yaml")
    with pytest.raises(WriteError):
        backend.create("A", Item(name="B"))


def test_remove(tmp_path: Path) -> None:
    """Test removing items."""
    backend = YamlFileBackend(tmp_path / "items.yaml")
    backend.create("A", Item(name="A", type="SwitchItem"))
    backend.remove("A")
    assert backend.list_items() == []
    with pytest.raises(WriteError, match="not found"):
        backend.remove("A")


def test_invalid_file(tmp_path: Path) -> None:
    """Test malformed files raise load errors."""
    path = tmp_path / "items.yaml"
    path.write_text("items: [unclosed")
    with pytest.raises(LoadError):
        YamlFileBackend(path).list_items()

    path.write_text("items:\n  - label: no name\n")
    with pytest.raises(LoadError, match="Invalid item entry"):
        YamlFileBackend(path).list_items()


def test_write_to_invalid_file(tmp_path: Path) -> None:
    """Test writes into a malformed file raise write errors."""
    path = tmp_path / "items.yaml"
    path.write_text("- just a list\n")
    with pytest.raises(WriteError):
        YamlFileBackend(path).create("A", Item(name="A"))
