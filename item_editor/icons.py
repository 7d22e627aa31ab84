"""Icon path lookup for items."""


def resolve_icon(category: str | None, type: str | None) -> str:
    """Return the icon path for an item, preferring its category over its type."""
    if category:
        return "../icon/" + category.lower()
    if type:
        return "../icon/" + type.lower().replace("item", "")
    return ""
