"""
Channel capability for dotlog.

A channel is wherever a message ends up: a console, a file, a socket,
or nowhere. Loggers do the severity filtering; a channel receives only
messages that already passed, and performs its side effect.

Concrete writers belong to the embedding application. This module
ships the abstract capability plus two helpers that write nothing
themselves:

    NullChannel      — discards every message
    CallbackChannel  — hands each message to an application callable
"""

from abc import ABC, abstractmethod
from typing import Callable

from .message import Message


class Channel(ABC):
    """Destination for log messages.

    Channels are shared: any number of loggers may hold the same
    instance, and no logger or registry ever closes it.
    """

    @abstractmethod
    def log(self, message: Message) -> None:
        """Perform this channel's side effect for one message."""


class NullChannel(Channel):
    """Channel that intentionally drops everything."""

    def log(self, message: Message) -> None:
        return None

    def __repr__(self):
        return "NullChannel()"


class CallbackChannel(Channel):
    """Channel that forwards each message to ``func(message)``.

    Usage::

        lines = []
        chan = CallbackChannel(lambda m: lines.append(m.text))
    """

    def __init__(self, func: Callable[[Message], None]):
        if not callable(func):
            raise TypeError(f"CallbackChannel needs a callable, got {func!r}")
        self.func = func

    def log(self, message: Message) -> None:
        self.func(message)

    def __repr__(self):
        name = getattr(self.func, '__qualname__', repr(self.func))
        return f"CallbackChannel({name})"
