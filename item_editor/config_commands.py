"""Configuration commands for the item editor CLI."""

from cyclopts import App

from item_editor.config import DEFAULTS, get_config

config_app = App(name="config", help="Manage configuration")


def _scope(global_: bool) -> str:
    return "global" if global_ else "local"


@config_app.command
def set(key: str, value: str, global_: bool = False) -> None:
    """Set a configuration setting.

    Args:
        key: Configuration key, e.g. backend, rest.url, yaml.path
        value: Configuration value
        global_: Write to the global config instead of the local one
    """
    get_config(use_global=global_).set(key, value)
    print(f"Set {key} = {value} ({_scope(global_)})")


@config_app.command
def unset(key: str, global_: bool = False) -> None:
    """Unset a configuration setting."""
    get_config(use_global=global_).unset(key)
    print(f"Unset {key} ({_scope(global_)})")


@config_app.command
def get(key: str, global_: bool = False) -> None:
    """Get the effective value of a configuration setting."""
    value = get_config(use_global=global_).get(key)
    if value is None:
        print(f"{key} is not set")
    else:
        print(f"{key} = {value}")


@config_app.command(name="list")
def list_config(global_: bool = False, defaults: bool = False) -> None:
    """List configuration settings.

    Args:
        global_: List the global config only
        defaults: Include built-in defaults for keys that are not set
    """
    settings = get_config(use_global=global_).list()
    if defaults:
        settings = {**DEFAULTS, **settings}

    if not settings:
        print(f"No {_scope(global_)} configuration settings")
        return

    for key, value in settings.items():
        print(f"{key} = {value}")
