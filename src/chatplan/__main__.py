"""Entry point for chatplan CLI."""

import sys

from chatplan.cli import build_parser
from chatplan.cli._common import configure_logging


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
