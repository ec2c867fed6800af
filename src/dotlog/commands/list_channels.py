"""dotlog channels — list the channel plugins a config file can name."""

from dotlog.plugins import format_channel_list


def register(subparsers, parents):
    """Register the 'channels' subcommand."""
    p = subparsers.add_parser(
        "channels",
        parents=parents,
        help="List registered channel plugins",
    )
    p.set_defaults(func=run)


def run(args):
    print(format_channel_list())
    print("\nAny 'package.module:Factory' import path is accepted as well.")
    return 0
