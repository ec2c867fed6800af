"""
dotlog — hierarchical named loggers with pluggable channels.

Callers obtain loggers by dotted name; a new logger copies its
threshold and channel from the nearest registered ancestor. Messages
at or above a logger's threshold go to its channel.

Public API:
    get_logger        — get or lazily create a logger by dotted name
    get_root_logger   — the root logger ('')
    create_logger     — explicit registration (AlreadyExistsError if taken)
    find_logger       — lookup without creation
    shutdown          — clear the default registry
    get_registry      — the default Registry; set_registry swaps it
    Registry, Logger  — the underlying types
    Message, SeverityLevel and level constants
    Channel, NullChannel, CallbackChannel
    Attributes, Format — dotted-path config tree (XML/JSON/INI/YAML)
    configure, configure_from_file — apply a config to a registry
    trace             — function tracing decorator
"""

import logging as _logging

from ._version import __version__, __app_name__
from .levels import (
    SeverityLevel, TRACE, DEBUG, INFORMATION, INFO, WARNING, ERROR, FATAL,
    DEFAULT_THRESHOLD,
)
from .message import Message
from .channels import Channel, NullChannel, CallbackChannel
from .logger import Logger
from .registry import Registry, ROOT_NAME
from .manager import (
    get_logger, get_root_logger, create_logger, find_logger, shutdown,
    get_registry, set_registry,
)
from .errors import (
    DotlogError, AlreadyExistsError,
    AttributesError, UnknownAttributeError, InvalidAttributeError,
    PluginError, UnknownPluginError, InvalidPluginError,
)
from .attributes import Attributes, Format
from .config import configure, configure_from_file
from .plugins import register_channel, build_channel
from .trace import trace

# Library diagnostics stay silent unless the application configures logging
_logging.getLogger(__name__).addHandler(_logging.NullHandler())

__all__ = [
    '__version__', '__app_name__',
    'SeverityLevel', 'TRACE', 'DEBUG', 'INFORMATION', 'INFO', 'WARNING',
    'ERROR', 'FATAL', 'DEFAULT_THRESHOLD',
    'Message',
    'Channel', 'NullChannel', 'CallbackChannel',
    'Logger', 'Registry', 'ROOT_NAME',
    'get_logger', 'get_root_logger', 'create_logger', 'find_logger',
    'shutdown', 'get_registry', 'set_registry',
    'DotlogError', 'AlreadyExistsError',
    'AttributesError', 'UnknownAttributeError', 'InvalidAttributeError',
    'PluginError', 'UnknownPluginError', 'InvalidPluginError',
    'Attributes', 'Format',
    'configure', 'configure_from_file',
    'register_channel', 'build_channel',
    'trace',
]
