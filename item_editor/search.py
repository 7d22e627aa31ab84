"""Candidate lists for the parent and member pickers."""

from collections.abc import Iterator
from typing import TYPE_CHECKING

from item_editor.snapshot import ItemSnapshot

if TYPE_CHECKING:
    from item_editor.session import EditingSession


def search(
    snapshot: ItemSnapshot,
    query: str,
    restrict_to_groups: bool = False,
    exclude: str | None = None,
) -> Iterator[str]:
    """Yield names of items matching ``query``, sorted ascending.

    Args:
        snapshot: Items to search
        query: Substring the name must contain (case-sensitive)
        restrict_to_groups: Only consider group items
        exclude: Name to leave out, typically the item being edited

    Returns:
        Iterator over matching item names
    """
    matches = [
        item
        for item in snapshot.values()
        if query in item.name and (not restrict_to_groups or item.is_group) and item.name != exclude
    ]
    return (item.name for item in sorted(matches, key=lambda item: item.name))


def parent_candidates(session: "EditingSession", query: str) -> list[str]:
    """Groups the edited item could be added to."""
    chosen = set(session.working.group_names)
    names = search(session.snapshot, query, restrict_to_groups=True, exclude=session.working.name or None)
    return [name for name in names if name not in chosen]


def member_candidates(session: "EditingSession", query: str) -> list[str]:
    """Items that could be added as members of the edited group.

    Existing members and the group's own parents are left out.
    """
    taken = set(session.members) | set(session.working.group_names)
    names = search(session.snapshot, query, exclude=session.working.name or None)
    return [name for name in names if name not in taken]
