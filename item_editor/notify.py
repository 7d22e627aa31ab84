"""User notifications and the dirty-state side channel."""

from abc import ABC, abstractmethod

import structlog

logger = structlog.get_logger()


class Notifier(ABC):
    """Shows short, fire-and-forget messages to the user."""

    @abstractmethod
    def show_message(self, text: str) -> None:
        """Show a message."""
        pass


class DirtyNotifier(ABC):
    """Tells other views that their copy of the registry is stale."""

    @abstractmethod
    def mark_dirty(self) -> None:
        """Flag the registry as changed."""
        pass


class ConsoleNotifier(Notifier):
    """Prints messages to stdout."""

    def show_message(self, text: str) -> None:
        logger.debug("Showing message", text=text)
        print(text)


class RecordingNotifier(Notifier):
    """Keeps messages in memory instead of showing them."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def show_message(self, text: str) -> None:
        self.messages.append(text)


class DirtyFlag(DirtyNotifier):
    """In-process dirty flag, raised by writes and cleared by whoever refreshes."""

    def __init__(self) -> None:
        self.dirty = False
        self.count = 0

    def mark_dirty(self) -> None:
        logger.debug("Registry marked dirty")
        self.dirty = True
        self.count += 1

    def consume(self) -> bool:
        """Return the current flag and clear it."""
        dirty, self.dirty = self.dirty, False
        return dirty
