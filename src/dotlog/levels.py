"""
Severity levels for dotlog messages.

Levels form a single ascending axis. The filter rule is simple:

    message.priority >= logger.threshold  ->  message is forwarded

    ←── chattier ─────────── default ─────────── severe ──→
      1       2          3            4        5       6
    TRACE   DEBUG   INFORMATION    WARNING   ERROR   FATAL

Comparison always uses the integer order, never the level name.
"""

from enum import IntEnum


class SeverityLevel(IntEnum):
    """Ordered message priority, ascending severity."""

    TRACE = 1
    DEBUG = 2
    INFORMATION = 3
    WARNING = 4
    ERROR = 5
    FATAL = 6

    # Alias: SeverityLevel.INFO is SeverityLevel.INFORMATION
    INFO = 3

    @classmethod
    def parse(cls, value):
        """Coerce a level given as a member, an int, or a name.

        Names are case-insensitive and accept the usual short forms
        ('info', 'warn', 'err') plus 'critical' for FATAL.

        Raises:
            ValueError: if value does not name a level.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Not a severity level: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Severity out of range: {value!r}") from None
        if isinstance(value, str):
            key = value.strip().lower()
            if key.isdigit():
                return cls.parse(int(key))
            level = _LEVEL_NAMES.get(key)
            if level is not None:
                return level
        raise ValueError(f"Not a severity level: {value!r}")


_LEVEL_NAMES = {
    'trace': SeverityLevel.TRACE,
    'debug': SeverityLevel.DEBUG,
    'info': SeverityLevel.INFORMATION,
    'information': SeverityLevel.INFORMATION,
    'warn': SeverityLevel.WARNING,
    'warning': SeverityLevel.WARNING,
    'err': SeverityLevel.ERROR,
    'error': SeverityLevel.ERROR,
    'fatal': SeverityLevel.FATAL,
    'critical': SeverityLevel.FATAL,
}

TRACE = SeverityLevel.TRACE
DEBUG = SeverityLevel.DEBUG
INFORMATION = SeverityLevel.INFORMATION
INFO = SeverityLevel.INFORMATION
WARNING = SeverityLevel.WARNING
ERROR = SeverityLevel.ERROR
FATAL = SeverityLevel.FATAL

# Threshold given to the root logger when it is first materialized
DEFAULT_THRESHOLD = INFORMATION
