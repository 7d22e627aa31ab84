"""Error types for the item editor."""


class ItemEditorError(Exception):
    """Base class for all item editor errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(ItemEditorError):
    """A form value was rejected before anything was written."""


class DuplicateNameError(ValidationError):
    """The chosen item name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Item name already exists: {name}")
        self.name = name


class WriteError(ItemEditorError):
    """The storage backend rejected a create, update or delete."""


class LoadError(ItemEditorError):
    """Items could not be loaded from the storage backend."""


class ItemNotFoundError(LoadError):
    """No item with the requested name exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Item not found: {name}")
        self.name = name
