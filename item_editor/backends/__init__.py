"""Backend implementations."""

from item_editor.backends.rest import RestBackend
from item_editor.backends.yaml_file import YamlFileBackend

__all__ = ["RestBackend", "YamlFileBackend"]
