"""
Registry — name-to-Logger store with hierarchical creation.

Every dotted name has a place in an implicit tree whose root is the
empty string. Nothing stores that tree: a new logger finds its parent
by peeling '.'-delimited segments off its own name until it hits a
name that is actually registered, and copies that logger's threshold
and channel.

    registry.create('svc', chan, WARNING)
    registry.get_or_create('svc.db.pool')   # inherits from 'svc'
    registry.find('svc.db')                  # None: never registered

Only the requested name is inserted. Intermediate segments that were
never created or looked up stay unregistered, so a logger created
later for 'svc.db' also inherits from 'svc', not from 'svc.db.pool'.
The root is the exception: it is materialized (threshold INFORMATION,
no channel) whenever a lookup or an ancestor walk reaches it.

Locking: lookups share a read lock. Creation takes the write lock
once, re-checks for a racing insert, walks the ancestor chain directly
on the entry dict and inserts before releasing. Dispatch never happens
under the registry lock.
"""

import logging
from typing import Dict, List, Optional

from .channels import Channel
from .errors import AlreadyExistsError
from .levels import DEFAULT_THRESHOLD, SeverityLevel
from .lock import ReadWriteLock
from .logger import Logger

_log = logging.getLogger(__name__)

ROOT_NAME = ''
SEPARATOR = '.'


def parent_name(name: str) -> Optional[str]:
    """Syntactic parent of a dotted name: 'a.b.c' -> 'a.b', 'a' -> ''.

    Returns None for the root, which has no parent.
    """
    if name == ROOT_NAME:
        return None
    pos = name.rfind(SEPARATOR)
    if pos == -1:
        return ROOT_NAME
    return name[:pos]


class Registry:
    """Process-wide (or test-local) store of loggers keyed by name.

    Two lookups of the same name observe the same Logger until
    shutdown(). After shutdown() the registry behaves as freshly
    built; handles obtained earlier keep working but are no longer
    reachable by name or used as ancestors.
    """

    def __init__(self, root_threshold: SeverityLevel = DEFAULT_THRESHOLD):
        self.root_threshold = SeverityLevel.parse(root_threshold)
        self._entries: Dict[str, Logger] = {}
        self._lock = ReadWriteLock()

    # -- reads ------------------------------------------------------------

    def find(self, name: str) -> Optional[Logger]:
        """Return the registered logger for name, or None. Never creates."""
        with self._lock.read():
            return self._entries.get(name)

    def names(self) -> List[str]:
        """Sorted snapshot of registered names."""
        with self._lock.read():
            return sorted(self._entries)

    def __len__(self):
        with self._lock.read():
            return len(self._entries)

    def __contains__(self, name):
        with self._lock.read():
            return name in self._entries

    # -- creation ---------------------------------------------------------

    def get_or_create(self, name: str) -> Logger:
        """Return the logger for name, creating it if needed.

        A new logger copies threshold and channel from the nearest
        registered ancestor (see module docstring).
        """
        logger = self.find(name)
        if logger is not None:
            return logger

        with self._lock.write():
            logger = self._entries.get(name)
            if logger is not None:
                return logger       # another thread won the race
            if name == ROOT_NAME:
                logger = self._new_root()
            else:
                threshold, channel = self._nearest_ancestor(name).settings()
                logger = Logger(name, channel, threshold)
            self._entries[name] = logger

        _log.debug("created logger %r (threshold=%s)", name, logger.threshold.name)
        return logger

    def create(self, name: str, channel: Optional[Channel],
               threshold: SeverityLevel = SeverityLevel.INFORMATION) -> Logger:
        """Register a logger with exactly the given channel and threshold.

        Raises:
            AlreadyExistsError: if name is already registered. The
                existing logger is left untouched.
        """
        logger = Logger(name, channel, threshold)
        with self._lock.write():
            if name in self._entries:
                raise AlreadyExistsError(name)
            self._entries[name] = logger

        _log.debug("registered logger %r (threshold=%s)", name, logger.threshold.name)
        return logger

    def get_root(self) -> Logger:
        """Return the root logger, materializing it with defaults if absent."""
        return self.get_or_create(ROOT_NAME)

    def parent_of(self, name: str) -> Logger:
        """Nearest registered ancestor that a new logger for name would copy.

        Does not insert name. The root is materialized if the walk
        reaches it and it is absent. For the root itself, returns the
        root.
        """
        if name == ROOT_NAME:
            return self.get_root()
        with self._lock.write():
            return self._nearest_ancestor(name)

    # -- teardown ---------------------------------------------------------

    def shutdown(self) -> None:
        """Drop every entry. Idempotent."""
        with self._lock.write():
            count = len(self._entries)
            self._entries.clear()
        if count:
            _log.debug("registry shut down, %d logger(s) dropped", count)

    # -- internals (write lock held) --------------------------------------

    def _new_root(self) -> Logger:
        return Logger(ROOT_NAME, None, self.root_threshold)

    def _root_locked(self) -> Logger:
        root = self._entries.get(ROOT_NAME)
        if root is None:
            root = self._new_root()
            self._entries[ROOT_NAME] = root
        return root

    def _nearest_ancestor(self, name: str) -> Logger:
        """Walk up the dotted path to the first registered name.

        Iterative so that pathologically deep names cannot exhaust the
        stack. Terminates at the root, which is always resolvable.
        """
        current = name
        while True:
            current = parent_name(current)
            if current is None or current == ROOT_NAME:
                return self._root_locked()
            parent = self._entries.get(current)
            if parent is not None:
                return parent

    def __repr__(self):
        return f"Registry({len(self)} loggers)"
