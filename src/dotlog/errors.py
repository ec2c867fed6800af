"""
Exception taxonomy for dotlog.

Only AlreadyExistsError is raised by the logger registry itself. The
attribute and plugin families belong to the configuration wrapper and
the channel plugin loader; each kind stays separately catchable.
"""


class DotlogError(Exception):
    """Base class for every error raised by dotlog."""


class AlreadyExistsError(DotlogError):
    """Explicit creation of a logger whose name is already registered."""

    def __init__(self, name: str):
        self.name = name
        label = repr(name) if name else "root logger ''"
        super().__init__(f"Logger already exists: {label}")


class AttributesError(DotlogError):
    """Base class for attribute tree failures."""


class UnknownAttributeError(AttributesError, LookupError):
    """No node at the requested attribute path."""


class InvalidAttributeError(AttributesError, ValueError):
    """A value could not be converted, parsed or serialized."""


class PluginError(DotlogError):
    """Base class for channel plugin failures."""


class UnknownPluginError(PluginError, LookupError):
    """No channel plugin is registered or importable under that name."""


class InvalidPluginError(PluginError, TypeError):
    """The plugin does not build a Channel."""
