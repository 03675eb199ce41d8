#!/usr/bin/env python3
import argparse
import sys
from typing import List

from govanity_lib import GovanityError, generate_from_config


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="govanity",
        description="Create HTML files containing go-import meta tags for custom import domains.",
    )
    parser.add_argument(
        "-c",
        "--config",
        default="govanity.cfg",
        help="Configuration file (default: govanity.cfg)",
    )
    parser.add_argument(
        "-o",
        "--out",
        default=".",
        help="Output directory (default: .)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print names of files as they are written",
    )

    args, extra = parser.parse_known_args(argv)
    if extra:
        parser.print_usage(sys.stderr)
        return 2

    try:
        generate_from_config(args.config, args.out, args.verbose)
    except GovanityError as e:
        print(f"govanity: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
