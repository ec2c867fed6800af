"""Main CLI entry point for dotlog.

Implements a two-pass argument parser:
  1. First pass: extract global flags (--verbose, --quiet, --config)
  2. Second pass: dispatch to subcommand with shared parent args

Global flags can appear before OR after the subcommand:
  dotlog -v resolve svc.db        # works
  dotlog resolve svc.db -v        # also works

Subcommands self-register via register(subparsers, parents) convention.

CLI diagnostics are themselves dotlog messages: they go through the
'dotlog.cli' logger, whose channel writes to stderr. -v lowers its
threshold one step per flag, -Q raises it.
"""

import argparse
import sys

from dotlog._version import BASE_VERSION, VERSION
from dotlog.channels import CallbackChannel
from dotlog.levels import SeverityLevel
from dotlog.manager import get_logger

CLI_LOGGER = "dotlog.cli"

# Prefixes for stderr diagnostics, by severity
_PREFIXES = {
    SeverityLevel.TRACE: "  [TRACE] ",
    SeverityLevel.DEBUG: "  [DEBUG] ",
    SeverityLevel.INFORMATION: "  ",
    SeverityLevel.WARNING: "  [WARN] ",
    SeverityLevel.ERROR: "  ERROR: ",
    SeverityLevel.FATAL: "  FATAL: ",
}


# ---------------------------------------------------------------------------
# Global flags (can precede the subcommand)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--verbose": {"aliases": ["-v"], "action": "count", "default": 0,
                  "help": "More diagnostics (-v debug, -vv trace)"},
    "--quiet": {"aliases": ["-Q"], "action": "count", "default": 0,
                "help": "Fewer diagnostics (-Q warnings, -QQ errors, -QQQ fatal only)"},
    "--config": {"metavar": "PATH", "default": None,
                 "help": "Config file (default: $DOTLOG_CONFIG, .dotlog.* walk-up, "
                         "~/.dotlog/config.*)"},
}


def _add_global_flags(parser, suppress_defaults=False):
    """Declare GLOBAL_FLAGS on parser, optionally without defaults."""
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        if suppress_defaults:
            kw["default"] = argparse.SUPPRESS
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(add_help=False)
    _add_global_flags(global_parser)

    global_args, remaining = global_parser.parse_known_args(argv)
    return global_args, remaining


def cli_threshold(verbose=0, quiet=0):
    """Map -v/-Q counts onto a severity threshold, starting at INFORMATION."""
    value = int(SeverityLevel.INFORMATION) - (verbose or 0) + (quiet or 0)
    value = max(int(SeverityLevel.TRACE), min(int(SeverityLevel.FATAL), value))
    return SeverityLevel(value)


def _write_stderr(message):
    prefix = _PREFIXES.get(message.priority, "  ")
    print(f"{prefix}{message.text}", file=sys.stderr)


def init_cli_logger(verbose=0, quiet=0):
    """Point the 'dotlog.cli' logger at stderr with the requested threshold."""
    log = get_logger(CLI_LOGGER)
    log.channel = CallbackChannel(_write_stderr)
    log.threshold = cli_threshold(verbose, quiet)
    return log


# ---------------------------------------------------------------------------
# Shared parent parser (inherited by all subcommands via parents=[])
# ---------------------------------------------------------------------------
def _build_common_parser():
    """Build the shared argument parser inherited by every subcommand."""
    common = argparse.ArgumentParser(add_help=False)
    # Already consumed by pass 1; declared again only for --help text
    _add_global_flags(common, suppress_defaults=True)
    return common


# ---------------------------------------------------------------------------
# Subcommand discovery and registration
# ---------------------------------------------------------------------------
def _discover_commands():
    """Import and return all command modules.

    Each module in dotlog.commands must export:
      register(subparsers, parents) — add itself to the subparser
      run(args) — execute the command
    """
    from dotlog.commands import convert, list_channels, resolve
    return [resolve, convert, list_channels]


def _build_parser(commands, common_parser):
    """Build the main argparse parser with subcommand dispatch."""
    parser = argparse.ArgumentParser(
        prog="dotlog",
        description="dotlog — inspect logger configuration and convert config files",
        epilog=(
            "Run 'dotlog <command> --help' for details on a specific command.\n"
            "\n"
            "Global flags (--verbose, --quiet, --config) can appear\n"
            "before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"dotlog {BASE_VERSION} ({VERSION})",
    )

    _add_global_flags(parser, suppress_defaults=True)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_module in commands:
        cmd_module.register(subparsers, parents=[common_parser])

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for the dotlog CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success, 1 = handled error, 2 = usage error).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    global_args, remaining = _extract_global_flags(argv)
    init_cli_logger(global_args.verbose, global_args.quiet)

    # Pass 2: parse subcommand + shared/specific args
    common_parser = _build_common_parser()
    commands = _discover_commands()
    parser = _build_parser(commands, common_parser)

    if not remaining:
        parser.print_help()
        return 0

    try:
        args = parser.parse_args(remaining)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 2

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    # Merge global args into the namespace for convenience
    for key, value in vars(global_args).items():
        if getattr(args, key, None) is None:
            setattr(args, key, value)

    try:
        return args.func(args) or 0
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
