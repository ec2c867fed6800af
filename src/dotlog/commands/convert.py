"""dotlog convert — convert an attributes file between XML, JSON, INI and YAML.

Formats are taken from file suffixes unless --from / --to say otherwise:

    dotlog convert logging.xml --to yaml          # prints YAML to stdout
    dotlog convert logging.ini -o logging.json    # writes JSON
"""

import argparse
import sys

from dotlog.attributes import Format, load_attributes, save_attributes
from dotlog.errors import AttributesError
from dotlog.manager import get_logger

FORMAT_NAMES = [fmt.value for fmt in Format]


def register(subparsers, parents):
    """Register the 'convert' subcommand."""
    p = subparsers.add_parser(
        "convert",
        parents=parents,
        help="Convert an attributes file between formats",
        description=(
            "Read an attributes file and write it in another format.\n"
            f"Known formats: {', '.join(FORMAT_NAMES)}."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("input", metavar="INPUT", help="File to read")
    p.add_argument("--from", dest="from_format", metavar="FORMAT",
                   help="Input format (default: from INPUT suffix)")
    p.add_argument("--to", dest="to_format", metavar="FORMAT",
                   help="Output format (default: from --output suffix)")
    p.add_argument("--output", "-o", metavar="PATH",
                   help="Write here instead of stdout")
    p.set_defaults(func=run)


def run(args):
    """Execute the convert command."""
    log = get_logger("dotlog.cli")

    if not args.to_format and not args.output:
        log.error("Give --to FORMAT or --output PATH to choose the output format")
        return 2

    try:
        attrs = load_attributes(args.input, args.from_format)
        if args.output:
            path = save_attributes(attrs, args.output, args.to_format)
            log.information("Wrote {path}", path=path)
        else:
            sys.stdout.write(attrs.save_attr(Format.parse(args.to_format)))
    except FileNotFoundError:
        log.error("Input file not found: {path}", path=args.input)
        return 1
    except AttributesError as e:
        log.error(str(e))
        return 1
    return 0
