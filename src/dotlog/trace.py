"""
Function tracing decorator.

Routes entry/exit/exception lines through a dotlog Logger at TRACE
severity. Nothing is formatted unless that logger is enabled for
TRACE, so an untraced call costs one threshold check.

    @trace
    def load(path): ...                 # logs to get_logger(__name__ of load's module)

    @trace('svc.io')
    def fetch(url): ...                 # logs to get_logger('svc.io')

    @trace(logger=my_logger)
    def parse(text): ...
"""

import functools
import inspect
from pathlib import Path

from .levels import TRACE
from .manager import get_logger


def _short_repr(value):
    """Abbreviated repr for trace lines: long strings and lists are cut."""
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, list) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def _format_args(args, kwargs, is_method):
    args_repr = []
    remaining_args = args
    if is_method and args:
        args_repr.append('self')
        remaining_args = args[1:]
    for arg in remaining_args:
        args_repr.append(_short_repr(arg))
    for key, value in kwargs.items():
        args_repr.append(f"{key}={_short_repr(value)}")
    return ', '.join(args_repr)


def _decorate(func, logger_name=None, logger=None):
    module = inspect.getmodule(func)
    module_name = module.__name__ if module else "unknown"
    func_name = func.__name__
    # A qualname like 'Class.method' means the first positional arg is self
    qual_parts = func.__qualname__.split('.')
    is_method = len(qual_parts) > 1 and qual_parts[-2] != '<locals>'

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Resolved per call so a shutdown() between calls is honored
        if logger is not None:
            target = logger
        else:
            target = get_logger(logger_name or module_name)

        if not target.is_enabled_for(TRACE):
            return func(*args, **kwargs)

        target.trace(">> {mod}.{fn}({args})",
                     mod=module_name, fn=func_name,
                     args=_format_args(args, kwargs, is_method))
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            target.trace("!! {mod}.{fn} raised: {exc}: {msg}",
                         mod=module_name, fn=func_name,
                         exc=type(e).__name__, msg=str(e))
            raise

        if result is not None:
            target.trace("<< {mod}.{fn} returned: {val}",
                         mod=module_name, fn=func_name, val=_short_repr(result))
        return result

    return wrapper


def trace(func=None, *, logger=None):
    """Decorator to trace function calls through a dotlog Logger.

    Usable bare (@trace), with a logger name (@trace('svc.io')) or
    with a Logger instance (@trace(logger=log)).
    """
    if callable(func):
        return _decorate(func, logger=logger)
    logger_name = func

    def decorator(f):
        return _decorate(f, logger_name=logger_name, logger=logger)

    return decorator
