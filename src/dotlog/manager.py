"""
Module-level default registry and the public convenience functions.

Most applications never build a Registry themselves: they call
get_logger(__name__) and let the default registry appear on first
use. shutdown() clears it; the next lookup starts again from a fresh
root. Tests swap in a private registry with set_registry().

Usage::

    from dotlog import create_logger, get_logger, WARNING

    create_logger('svc', my_channel, WARNING)
    log = get_logger('svc.worker')      # inherits WARNING + my_channel
    log.error("worker {n} died", n=3)
"""

import threading
from typing import Optional

from .channels import Channel
from .levels import SeverityLevel
from .logger import Logger
from .registry import Registry


# =============================================================================
# Module-level singleton
# =============================================================================

_registry: Optional[Registry] = None
_registry_lock = threading.Lock()


def get_registry() -> Registry:
    """Get the default Registry, creating it on first use."""
    global _registry
    registry = _registry
    if registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = Registry()
            registry = _registry
    return registry


def set_registry(registry: Optional[Registry]) -> Optional[Registry]:
    """Replace the default Registry and return the previous one.

    Passing None makes the next call to get_registry() build a new one.
    """
    global _registry
    with _registry_lock:
        previous = _registry
        _registry = registry
    return previous


def get_logger(name: str) -> Logger:
    """Return the logger for name from the default registry, creating it if needed."""
    return get_registry().get_or_create(name)


def get_root_logger() -> Logger:
    """Return the root logger of the default registry."""
    return get_registry().get_root()


def create_logger(name: str, channel: Optional[Channel],
                  threshold: SeverityLevel = SeverityLevel.INFORMATION) -> Logger:
    """Explicitly register a logger in the default registry.

    Raises:
        AlreadyExistsError: if name is already registered.
    """
    return get_registry().create(name, channel, threshold)


def find_logger(name: str) -> Optional[Logger]:
    """Look name up in the default registry without creating it."""
    return get_registry().find(name)


def shutdown() -> None:
    """Clear every logger from the default registry."""
    get_registry().shutdown()
