"""dotlog resolve — show the effective threshold and channel of logger names.

Loads the configuration (see dotlog.config for how the file is found),
applies it to a fresh Registry, and reports for each name what a
get_logger() call would hand back:

    NAME         THRESHOLD    CHANNEL          SOURCE
    svc          INFORMATION  NullChannel()    registered
    svc.db.pool  DEBUG        NullChannel()    inherits from svc.db

Names are looked up without being registered, so the report reflects
the configuration alone. Use '' for the root logger.
"""

import argparse

from dotlog.config import configure, load_config, resolve_config_path
from dotlog.errors import DotlogError
from dotlog.manager import get_logger
from dotlog.registry import Registry


def register(subparsers, parents):
    """Register the 'resolve' subcommand."""
    p = subparsers.add_parser(
        "resolve",
        parents=parents,
        help="Show effective threshold and channel for logger names",
        description=(
            "Apply the dotlog configuration to a fresh registry and show\n"
            "which threshold and channel each named logger would get,\n"
            "and whether it is configured or inherits from an ancestor."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "names", nargs="+", metavar="NAME",
        help="Dotted logger name ('' for the root)",
    )
    p.set_defaults(func=run)


def _label(name):
    return name if name else "<root>"


def resolve_names(registry, names):
    """Return (name, threshold, channel, source) rows for names.

    None of the names is inserted into registry; only the root may be
    materialized.
    """
    registry.get_root()
    rows = []
    for name in names:
        logger = registry.find(name)
        if logger is not None:
            source = "registered"
        else:
            logger = registry.parent_of(name)
            source = f"inherits from {_label(logger.name)}"
        threshold, channel = logger.settings()
        rows.append((name, threshold, channel, source))
    return rows


def format_rows(rows):
    """Render resolve rows as an aligned table."""
    table = [("NAME", "THRESHOLD", "CHANNEL", "SOURCE")]
    for name, threshold, channel, source in rows:
        channel_text = repr(channel) if channel is not None else "-"
        table.append((_label(name), threshold.name, channel_text, source))
    widths = [max(len(row[i]) for row in table) for i in range(3)]
    lines = []
    for row in table:
        cells = [row[i].ljust(widths[i]) for i in range(3)] + [row[3]]
        lines.append("  ".join(cells))
    return "\n".join(lines)


def run(args):
    """Execute the resolve command."""
    log = get_logger("dotlog.cli")
    registry = Registry()

    config_path = resolve_config_path(args.config)
    if config_path is None:
        log.warning("No config file found; showing built-in defaults")
    else:
        log.debug("Using config {path}", path=config_path)
        try:
            configure(load_config(config_path), registry)
        except FileNotFoundError as e:
            log.error(str(e))
            return 1
        except DotlogError as e:
            log.error("{path}: {err}", path=config_path, err=e)
            return 1

    print(format_rows(resolve_names(registry, args.names)))
    return 0
