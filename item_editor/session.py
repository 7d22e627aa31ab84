"""Editing sessions: load an item into a form, edit it, and write it back.

A session is a value. Every operation takes a session and returns a new one,
leaving ``original`` exactly as it was loaded. Only ``submit`` talks to the
storage backend, and it skips the write when the form, converted back to
its stored form, equals the original item normalized the same way.
"""

import copy
import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from item_editor import functions, group_types
from item_editor.backend import Backend
from item_editor.errors import ItemNotFoundError, ValidationError, WriteError
from item_editor.models import (
    ARITHMETIC_FUNCTIONS,
    GROUP_BASE_TYPES,
    GROUP_ITEM,
    ITEM_TYPES,
    LOGICAL_FUNCTIONS,
    NO_GROUP_TYPE,
    AggregationFunction,
    Item,
    ItemForm,
)
from item_editor.notify import DirtyNotifier, Notifier
from item_editor.snapshot import ItemSnapshot
from item_editor.validation import validate_new_name

logger = structlog.get_logger()

ARITHMETIC_GROUP_TYPES = ("NumberItem", "DimmerItem")
DISPLAY_GROUP_TYPES = (NO_GROUP_TYPE,) + tuple(group_types.to_display(base) for base in GROUP_BASE_TYPES)

CREATED_MESSAGE = "Item created."
UPDATED_MESSAGE = "Item updated."


class SessionMode(Enum):
    CREATE = "create"
    EDIT = "edit"


class SessionState(Enum):
    """Lifecycle of an editing session."""

    LOADING = "loading"
    CREATE = "create"
    EDIT = "edit"
    NOT_FOUND = "not_found"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class EditingSession:
    """One create-or-edit interaction with a single item."""

    mode: SessionMode
    original: Item
    working: ItemForm
    snapshot: ItemSnapshot
    candidate_functions: tuple[str, ...] = field(default=LOGICAL_FUNCTIONS)

    @property
    def state(self) -> SessionState:
        return SessionState.CREATE if self.mode is SessionMode.CREATE else SessionState.EDIT

    @property
    def baseline(self) -> Item:
        """The original item in the shape ``to_item`` produces, used for change detection."""
        return to_item(to_form(self.original))

    @property
    def members(self) -> list[str]:
        """Names of items that list the edited item as one of their groups."""
        name = self.working.name
        if not name:
            return []
        return sorted(item.name for item in self.snapshot.values() if name in item.group_names)


@dataclass
class SubmitResult:
    """Outcome of :func:`submit`.

    The editor is left after every submit, including failed ones, so
    ``navigate_away`` is always True. Callers that want to keep the form
    open on failure can check ``state`` instead.
    """

    state: SessionState
    item: Item
    written: bool = False
    message: str | None = None
    error: WriteError | None = None
    navigate_away: bool = True

    @property
    def ok(self) -> bool:
        return self.state is SessionState.SUCCEEDED


def derive_function_set(display_group_type: str | None) -> tuple[str, ...]:
    """Return the function kinds offered for a display group type."""
    if display_group_type in ARITHMETIC_GROUP_TYPES:
        return ARITHMETIC_FUNCTIONS
    return LOGICAL_FUNCTIONS


def to_form(item: Item) -> ItemForm:
    """Convert a stored item into its editable display form."""
    return ItemForm(
        name=item.name,
        type=item.type,
        group_type=group_types.to_display(item.group_type),
        category=item.category,
        label=item.label,
        tags=list(item.tags),
        group_names=list(item.group_names),
        function=functions.decode(item.function) or AggregationFunction(),
    )


def to_item(form: ItemForm) -> Item:
    """Convert a form back into the stored representation.

    Functions only apply to groups with a base type, so any other item is
    stored without a group type or function.
    """
    group_type = None
    function = None
    if form.type == GROUP_ITEM and form.group_type != NO_GROUP_TYPE:
        group_type = group_types.to_wire(form.group_type)
        function = functions.encode(form.function)

    return Item(
        name=form.name,
        type=form.type,
        group_type=group_type,
        category=form.category or None,
        label=form.label,
        tags=list(form.tags),
        group_names=list(form.group_names),
        function=function,
    )


def open_session(backend: Backend, name: str | None = None) -> EditingSession:
    """Load a snapshot and start editing ``name``, or a new item when no name is given.

    Raises:
        LoadError: If the backend cannot list items
        ItemNotFoundError: If ``name`` is not in the registry
    """
    snapshot = ItemSnapshot(backend.list_items(recursive=False))
    logger.debug("Loaded item snapshot", count=len(snapshot))

    if name is None:
        logger.info("Opening new item session")
        return EditingSession(
            mode=SessionMode.CREATE,
            original=Item(name=""),
            working=ItemForm(),
            snapshot=snapshot,
        )

    if name not in snapshot:
        logger.error("Item not found", name=name, state=SessionState.NOT_FOUND.value)
        raise ItemNotFoundError(name)

    # Two lookups give two independent copies.
    original = snapshot[name]
    working = to_form(snapshot[name])
    logger.info("Opening item session", name=name, group_type=working.group_type, function=working.function.kind)
    return EditingSession(
        mode=SessionMode.EDIT,
        original=original,
        working=working,
        snapshot=snapshot,
        candidate_functions=derive_function_set(working.group_type),
    )


def change_group_type(session: EditingSession, display_group_type: str) -> EditingSession:
    """Switch the group type and re-derive the offered functions.

    Any chosen function is reset when the group type actually changes.
    """
    if display_group_type not in DISPLAY_GROUP_TYPES:
        raise ValidationError(f"Unknown group type: {display_group_type}")

    candidates = derive_function_set(display_group_type)
    working = copy.deepcopy(session.working)
    changed = working.group_type != display_group_type
    working.group_type = display_group_type
    if changed:
        if not working.function.is_empty:
            logger.debug("Resetting function", kind=working.function.kind, group_type=display_group_type)
        working.function = AggregationFunction()
    return dataclasses.replace(session, working=working, candidate_functions=candidates)


def choose_function(session: EditingSession, kind: str, params: tuple[str, ...] = ()) -> EditingSession:
    """Select an aggregation function for the edited group.

    An empty ``kind`` clears the selection.
    """
    params = tuple(params)
    if kind and kind not in session.candidate_functions:
        raise ValidationError(f"Function {kind} is not available for group type {session.working.group_type}")
    if kind and len(params) != functions.arity(kind):
        raise ValidationError(f"Function {kind} takes {functions.arity(kind)} parameter(s), got {len(params)}")
    for param in params:
        if not param or functions.SEPARATOR in param:
            raise ValidationError(f"Invalid function parameter: {param!r}")

    working = copy.deepcopy(session.working)
    working.function = AggregationFunction(kind=kind, params=params) if kind else AggregationFunction()
    return dataclasses.replace(session, working=working)


def edit(session: EditingSession, **changes: Any) -> EditingSession:
    """Return a session with the given form fields changed.

    Raises:
        ValidationError: On an unknown field, a function change or a rename in edit mode
    """
    known = {f.name for f in dataclasses.fields(ItemForm)}
    unknown = set(changes) - known
    if unknown:
        raise ValidationError(f"Unknown item field(s): {', '.join(sorted(unknown))}")
    if "function" in changes:
        raise ValidationError("Functions are set with choose_function")
    if session.mode is SessionMode.EDIT and changes.get("name", session.working.name) != session.working.name:
        raise ValidationError("Item name cannot be changed")

    display_group_type = changes.pop("group_type", None)
    working = dataclasses.replace(copy.deepcopy(session.working), **changes)
    session = dataclasses.replace(session, working=working)
    if display_group_type is not None and display_group_type != working.group_type:
        session = change_group_type(session, display_group_type)
    return session


def has_changes(session: EditingSession) -> bool:
    """Whether the form differs from the loaded item once converted back."""
    return to_item(session.working) != session.baseline


def submit(
    session: EditingSession,
    backend: Backend,
    notifier: Notifier,
    dirty: DirtyNotifier,
) -> SubmitResult:
    """Write the edited item if it changed.

    Raises:
        ValidationError: If a new item has an empty, duplicate or unknown name or type
    """
    creating = session.mode is SessionMode.CREATE
    message = CREATED_MESSAGE if creating else UPDATED_MESSAGE
    if creating:
        validate_new_name(session.working.name, session.snapshot)
        if session.working.type not in ITEM_TYPES:
            raise ValidationError(f"Unknown item type: {session.working.type or '(none)'}")

    item = to_item(session.working)
    logger.debug("Submitting item", name=item.name, state=SessionState.SUBMITTING.value)

    if item == session.baseline:
        logger.info("Item unchanged, skipping write", name=item.name)
        notifier.show_message(message)
        return SubmitResult(state=SessionState.SUCCEEDED, item=item, message=message)

    try:
        saved = backend.create(item.name, item)
    except WriteError as e:
        logger.warning("Failed to write item", name=item.name, error=str(e))
        return SubmitResult(state=SessionState.FAILED, item=item, error=e)

    dirty.mark_dirty()
    notifier.show_message(message)
    logger.info("Item written", name=item.name, mode=session.mode.value)
    return SubmitResult(state=SessionState.SUCCEEDED, item=saved, written=True, message=message)
