"""
Logger — a named severity filter in front of a channel.

The emit rule is: a message is forwarded when
message.priority >= threshold and a channel is attached. Both a
missing channel and a filtered message are normal steady-state
conditions, so nothing is raised for either.

Threshold and channel are copied from the nearest registered ancestor
once, when the registry creates the logger. Later changes to either
logger never flow between them.
"""

import threading
from typing import Any, Optional

from .channels import Channel
from .levels import SeverityLevel
from .message import Message


class Logger:
    """Named entity holding a threshold and a shared channel reference.

    Loggers are normally obtained from a Registry (or the module-level
    get_logger()), which guarantees one instance per name.

    Usage::

        log = get_logger('svc.worker')
        log.warning("Queue depth {depth} over limit", depth=512)
        if log.debug_enabled:
            log.debug(expensive_dump())
    """

    def __init__(self, name: str, channel: Optional[Channel] = None,
                 threshold: SeverityLevel = SeverityLevel.INFORMATION):
        self._name = name
        self._channel = channel
        self._threshold = SeverityLevel.parse(threshold)
        # Guards _threshold and _channel only; never held during dispatch
        self._lock = threading.Lock()

    # -- identity -------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    def get_name(self) -> str:
        return self._name

    # -- threshold / channel --------------------------------------------

    @property
    def threshold(self) -> SeverityLevel:
        with self._lock:
            return self._threshold

    @threshold.setter
    def threshold(self, level) -> None:
        level = SeverityLevel.parse(level)
        with self._lock:
            self._threshold = level

    @property
    def channel(self) -> Optional[Channel]:
        with self._lock:
            return self._channel

    @channel.setter
    def channel(self, channel: Optional[Channel]) -> None:
        with self._lock:
            self._channel = channel

    def get_threshold(self) -> SeverityLevel:
        return self.threshold

    def set_threshold(self, level) -> None:
        self.threshold = level

    def get_channel(self) -> Optional[Channel]:
        return self.channel

    def set_channel(self, channel: Optional[Channel]) -> None:
        self.channel = channel

    # -- filtering and dispatch -----------------------------------------

    def settings(self):
        """Consistent (threshold, channel) pair, read under one lock."""
        with self._lock:
            return self._threshold, self._channel

    def log(self, message: Message) -> None:
        """Forward message to the channel if it passes the threshold."""
        threshold, channel = self.settings()
        if channel is None or message.priority < threshold:
            return
        channel.log(message)

    def is_enabled_for(self, level) -> bool:
        """True when a message at level would pass this logger's threshold.

        Lets callers skip building expensive messages that would be
        dropped anyway.
        """
        return self.threshold <= level

    @property
    def trace_enabled(self) -> bool:
        return self.is_enabled_for(SeverityLevel.TRACE)

    @property
    def debug_enabled(self) -> bool:
        return self.is_enabled_for(SeverityLevel.DEBUG)

    @property
    def information_enabled(self) -> bool:
        return self.is_enabled_for(SeverityLevel.INFORMATION)

    @property
    def warning_enabled(self) -> bool:
        return self.is_enabled_for(SeverityLevel.WARNING)

    @property
    def error_enabled(self) -> bool:
        return self.is_enabled_for(SeverityLevel.ERROR)

    @property
    def fatal_enabled(self) -> bool:
        return self.is_enabled_for(SeverityLevel.FATAL)

    # -- convenience emitters -------------------------------------------

    def emit(self, level, text: str, /, **kwargs: Any) -> None:
        """Build a Message from text at level and log it.

        text is a str.format template when kwargs are given. Formatting
        happens only once the level is known to pass.
        """
        level = SeverityLevel.parse(level)
        if not self.is_enabled_for(level):
            return
        if kwargs:
            text = text.format(**kwargs)
        self.log(Message(text, level, source=self._name))

    def trace(self, text: str, /, **kwargs: Any) -> None:
        self.emit(SeverityLevel.TRACE, text, **kwargs)

    def debug(self, text: str, /, **kwargs: Any) -> None:
        self.emit(SeverityLevel.DEBUG, text, **kwargs)

    def information(self, text: str, /, **kwargs: Any) -> None:
        self.emit(SeverityLevel.INFORMATION, text, **kwargs)

    info = information

    def warning(self, text: str, /, **kwargs: Any) -> None:
        self.emit(SeverityLevel.WARNING, text, **kwargs)

    def error(self, text: str, /, **kwargs: Any) -> None:
        self.emit(SeverityLevel.ERROR, text, **kwargs)

    def fatal(self, text: str, /, **kwargs: Any) -> None:
        self.emit(SeverityLevel.FATAL, text, **kwargs)

    def __repr__(self):
        name = self._name or '<root>'
        return (f"Logger({name!r}, threshold={self._threshold.name}, "
                f"channel={self._channel!r})")
