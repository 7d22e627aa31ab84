"""Item name validation against a registry snapshot."""

from enum import Enum

import structlog

from item_editor.errors import DuplicateNameError, ValidationError
from item_editor.snapshot import ItemSnapshot

logger = structlog.get_logger()


class FieldState(Enum):
    """Marking a name field should carry after validation."""

    VALID = "valid"
    INVALID = "invalid"
    UNCHANGED = "unchanged"


def is_duplicate(name: str, snapshot: ItemSnapshot) -> bool:
    """Return True if an item with exactly this name exists in the snapshot."""
    for existing in snapshot:
        if existing == name:
            return True
    return False


def name_field_state(name: str | None, snapshot: ItemSnapshot) -> FieldState:
    """Decide how the name field should be marked for the given input.

    A duplicate marks the field invalid. A non-empty unique name clears any
    prior invalid marking. Empty input leaves the marking as it is.
    """
    if name is not None and is_duplicate(name, snapshot):
        return FieldState.INVALID
    if name:
        return FieldState.VALID
    return FieldState.UNCHANGED


def validate_new_name(name: str, snapshot: ItemSnapshot) -> None:
    """Raise if ``name`` cannot be used for a new item.

    Raises:
        ValidationError: If the name is empty
        DuplicateNameError: If the name is already taken
    """
    if not name:
        raise ValidationError("Item name must not be empty")
    if is_duplicate(name, snapshot):
        logger.debug("Rejected duplicate item name", name=name)
        raise DuplicateNameError(name)
