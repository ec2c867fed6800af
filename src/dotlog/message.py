"""Message — the immutable log event passed from loggers to channels."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

from .levels import INFORMATION, SeverityLevel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Message:
    """A single log event.

    Attributes:
        text: Human-readable message text
        priority: Severity of the event
        source: Name of the emitting logger ('' when built by hand)
        timestamp: Creation time (UTC)
    """
    text: str
    priority: SeverityLevel = INFORMATION
    source: str = ''
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        # Ints in range and level names become members; anything else is kept as given
        if not isinstance(self.priority, SeverityLevel):
            try:
                object.__setattr__(self, 'priority', SeverityLevel.parse(self.priority))
            except ValueError:
                pass

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form for channels that serialize events."""
        priority = self.priority
        return {
            'timestamp': self.timestamp.isoformat(),
            'priority': priority.name if isinstance(priority, SeverityLevel) else priority,
            'source': self.source,
            'text': self.text,
        }
