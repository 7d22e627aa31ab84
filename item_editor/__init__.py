"""Item editor for home-automation item registries."""

__version__ = "0.1.0"
