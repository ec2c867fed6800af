"""
Channel plugin registry.

Configuration files refer to channels by plugin name ('null') or by
import path ('myapp.logsinks:JsonFileChannel'). The registry is a
global dictionary populated at import time via register_channel(),
the same way applications register their own writers:

    from dotlog.plugins import register_channel
    register_channel('console', ConsoleChannel)

A factory is any callable returning a Channel; it receives the
channel's configuration options as keyword arguments.
"""

import importlib
import logging
from typing import Any, Callable, Dict, List

from .channels import CallbackChannel, Channel, NullChannel
from .errors import InvalidPluginError, UnknownPluginError

_log = logging.getLogger(__name__)

ChannelFactory = Callable[..., Channel]

# Global channel plugin registry — populated by modules at import time
_CHANNELS: Dict[str, ChannelFactory] = {}

_DESCRIPTIONS: Dict[str, str] = {}


def register_channel(name: str, factory: ChannelFactory, description: str = '') -> None:
    """Register a channel factory under name.

    Duplicate names overwrite silently (allows an application to swap
    a built-in for its own implementation).
    """
    if not callable(factory):
        raise InvalidPluginError(f"Channel plugin {name!r} is not callable: {factory!r}")
    _CHANNELS[name] = factory
    if description or name not in _DESCRIPTIONS:
        _DESCRIPTIONS[name] = description or (factory.__doc__ or '').strip().split('\n')[0]


def register_channels(**factories: ChannelFactory) -> None:
    """Register several factories at once, keyed by name."""
    for name, factory in factories.items():
        register_channel(name, factory)


def unregister_channel(name: str) -> None:
    _CHANNELS.pop(name, None)
    _DESCRIPTIONS.pop(name, None)


def _import_factory(spec: str) -> Any:
    module_name, _, attr = spec.partition(':')
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise UnknownPluginError(f"Cannot import channel plugin {spec!r}: {e}") from e
    target: Any = module
    for part in attr.split('.'):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise UnknownPluginError(
                f"Channel plugin {spec!r}: {module_name} has no attribute {attr!r}"
            ) from None
    return target


def get_channel_factory(name: str) -> ChannelFactory:
    """Resolve a plugin name or 'module:Attribute' path to a factory.

    Raises:
        UnknownPluginError: nothing registered or importable under name.
        InvalidPluginError: the target is not callable.
    """
    factory = _CHANNELS.get(name)
    if factory is not None:
        return factory
    if ':' not in name:
        raise UnknownPluginError(f"Unknown channel plugin: {name!r}")
    factory = _import_factory(name)
    if not callable(factory):
        raise InvalidPluginError(f"Channel plugin {name!r} is not callable")
    _log.debug("resolved channel plugin %r to %r", name, factory)
    return factory


def build_channel(name: str, **options: Any) -> Channel:
    """Instantiate a channel from a plugin name and its options.

    Raises:
        UnknownPluginError: see get_channel_factory().
        InvalidPluginError: the factory rejects the options or returns
            something that is not a Channel.
    """
    factory = get_channel_factory(name)
    try:
        channel = factory(**options)
    except TypeError as e:
        raise InvalidPluginError(f"Channel plugin {name!r} rejected options {sorted(options)}: {e}") from e
    if not isinstance(channel, Channel):
        raise InvalidPluginError(
            f"Channel plugin {name!r} built {type(channel).__name__}, not a Channel"
        )
    return channel


def known_channels() -> List[str]:
    """Sorted names of registered channel plugins."""
    return sorted(_CHANNELS)


def format_channel_list() -> str:
    """Format the registered channel plugins for display."""
    lines = ["Available channel plugins:"]
    names = known_channels()
    if not names:
        return lines[0] + " (none)"
    width = max(len(name) for name in names)
    for name in names:
        desc = _DESCRIPTIONS.get(name, '')
        lines.append(f"  {name:<{width}}  {desc}".rstrip())
    return "\n".join(lines)


def _callback_channel(func) -> CallbackChannel:
    """Hand each message to a callable (or a 'module:function' path)."""
    if isinstance(func, str):
        func = _import_factory(func)
    return CallbackChannel(func)


register_channel('null', NullChannel, 'Discard every message')
register_channel('callback', _callback_channel)
