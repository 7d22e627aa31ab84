"""CLI for item editor."""

import sys
from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from item_editor import group_types
from item_editor.backend import Backend
from item_editor.backends import RestBackend, YamlFileBackend
from item_editor.config import get_config
from item_editor.config_commands import config_app
from item_editor.errors import ItemEditorError, ItemNotFoundError, LoadError
from item_editor.functions import arity, decode
from item_editor.listing import ItemListing, RemovalDialog
from item_editor.notify import ConsoleNotifier, DirtyFlag
from item_editor.search import search as search_items
from item_editor.session import (
    EditingSession,
    change_group_type,
    choose_function,
    derive_function_set,
    edit as edit_session,
    open_session,
    submit,
)
from item_editor.snapshot import ItemSnapshot

logger = structlog.get_logger()

app = App(
    help="Item Editor - Manage items of a home-automation registry",
)

app.command(config_app)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


def get_backend() -> Backend:
    """Get the configured backend.

    Raises:
        LoadError: If the configuration is unreadable or incomplete
    """
    try:
        config = get_config()
        backend_type = config.get("backend")

        if backend_type == "rest":
            url = config.get("rest.url")
            if not url:
                raise LoadError("REST url not configured. Set it using:\n  item-editor config set rest.url <url>")
            return RestBackend(url=url, token=config.get("rest.token"), timeout=config.get_float("rest.timeout"))
        elif backend_type == "yaml":
            return YamlFileBackend(path=config.get("yaml.path"))
    except ValueError as e:
        raise LoadError(str(e)) from e
    raise LoadError(f"Unknown backend: {backend_type}")


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _apply_options(
    session: EditingSession,
    type: str | None,
    group_type: str | None,
    function: str | None,
    params: str | None,
    label: str | None,
    category: str | None,
    tags: str | None,
    groups: str | None,
) -> EditingSession:
    """Apply the given command line options to the session's form."""
    changes: dict[str, object] = {}
    if type is not None:
        changes["type"] = type
    if label is not None:
        changes["label"] = label
    if category is not None:
        changes["category"] = category or None
    if tags is not None:
        changes["tags"] = _split_csv(tags)
    if groups is not None:
        changes["group_names"] = _split_csv(groups)
    session = edit_session(session, **changes)

    if group_type is not None:
        # Accept both the bare base type and the display form.
        if not group_type.endswith(group_types.GROUP_SUFFIX):
            group_type = group_types.to_display(group_type)
        session = change_group_type(session, group_type)
    if function is not None:
        parsed = decode(function)
        kind = parsed.kind if parsed else ""
        if params is not None:
            function_params = tuple(_split_csv(params))
        else:
            function_params = parsed.params if parsed else ()
        session = choose_function(session, kind, function_params)
    return session


def _submit(session: EditingSession, backend: Backend) -> None:
    result = submit(session, backend, ConsoleNotifier(), DirtyFlag())
    if result.error is not None:
        print(f"Failed to save item {result.item.name}: {result.error}")
    elif not result.written:
        logger.debug("Nothing to write", name=result.item.name)


@app.command(name="list")
def list_items() -> None:
    """List all items."""
    listing = ItemListing(get_backend())
    items = listing.refresh()

    print(f"Found {len(items)} item(s):\n")
    for item, icon in listing.entries():
        label = f" ({item.label})" if item.label else ""
        icon_str = f" [{icon}]" if icon else ""
        print(f"{item.name}: {item.type}{label}{icon_str}")


@app.command
def show(name: str) -> None:
    """Show an item as it appears in the editor."""
    session = open_session(get_backend(), name)
    form = session.working

    print(f"Item: {form.name}")
    print(f"Type: {form.type}")
    if form.label:
        print(f"Label: {form.label}")
    if form.category:
        print(f"Category: {form.category}")
    if form.type == "GroupItem":
        print(f"Group type: {form.group_type}")
        if not form.function.is_empty:
            params = f" ({', '.join(form.function.params)})" if form.function.params else ""
            print(f"Function: {form.function.kind}{params}")
        if session.members:
            print(f"Members: {', '.join(session.members)}")
    if form.tags:
        print(f"Tags: {', '.join(form.tags)}")
    if form.group_names:
        print(f"Groups: {', '.join(form.group_names)}")


@app.command
def create(
    name: str,
    type: str,
    group_type: str | None = None,
    function: str | None = None,
    params: str | None = None,
    label: str = "",
    category: str | None = None,
    tags: str = "",
    groups: str = "",
) -> None:
    """Create a new item.

    Args:
        name: Item name
        type: Item type, e.g. NumberItem or GroupItem
        group_type: Base type of a group, e.g. Number, or none
        function: Aggregation function kind, or a full wire string such as THRESHOLD_10_20
        params: Comma-separated function parameters
        label: Display label
        category: Icon category
        tags: Comma-separated tags
        groups: Comma-separated parent group names
    """
    backend = get_backend()
    session = open_session(backend)
    session = edit_session(session, name=name)
    session = _apply_options(session, type, group_type, function, params, label, category, tags, groups)
    _submit(session, backend)


@app.command
def edit(
    name: str,
    type: str | None = None,
    group_type: str | None = None,
    function: str | None = None,
    params: str | None = None,
    label: str | None = None,
    category: str | None = None,
    tags: str | None = None,
    groups: str | None = None,
) -> None:
    """Edit an existing item. Only the given options are changed."""
    backend = get_backend()
    session = open_session(backend, name)
    session = _apply_options(session, type, group_type, function, params, label, category, tags, groups)
    _submit(session, backend)


@app.command
def remove(name: str, yes: bool = False) -> None:
    """Remove an item after confirmation."""
    backend = get_backend()
    snapshot = ItemSnapshot(ItemListing(backend).refresh())
    if name not in snapshot:
        raise ItemNotFoundError(name)

    dialog = RemovalDialog(snapshot[name])
    if not yes:
        answer = input(f"Remove item {name}? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            dialog.cancel()
            print("Cancelled")
            return
    dialog.confirm(backend, ConsoleNotifier(), DirtyFlag())


@app.command
def search(query: str = "", groups_only: bool = False, exclude: str | None = None) -> None:
    """Search item names, e.g. to pick a parent group."""
    snapshot = ItemSnapshot(get_backend().list_items())
    for name in search_items(snapshot, query, restrict_to_groups=groups_only, exclude=exclude):
        print(name)


@app.command
def functions(group_type: str) -> None:
    """List the aggregation functions offered for a group type."""
    if not group_type.endswith(group_types.GROUP_SUFFIX):
        group_type = group_types.to_display(group_type)
    for kind in derive_function_set(group_type):
        count = arity(kind)
        print(f"{kind} ({count} parameter(s))" if count else kind)


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    try:
        app(tokens)
    except ItemEditorError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    app.meta()
