"""Conversion between bare group base types and their display form."""

from item_editor.models import NO_GROUP_TYPE

GROUP_SUFFIX = "Item"


def to_display(base_type: str | None) -> str:
    """Map a base type such as ``Number`` to ``NumberItem``; untyped groups map to ``none``."""
    if not base_type or base_type == NO_GROUP_TYPE:
        return NO_GROUP_TYPE
    return base_type + GROUP_SUFFIX


def to_wire(display_type: str | None) -> str | None:
    """Inverse of :func:`to_display`."""
    if not display_type or display_type == NO_GROUP_TYPE:
        return None
    return display_type.removesuffix(GROUP_SUFFIX)
