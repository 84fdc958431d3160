"""Command line entry point: convert an HTML file or standard input to ADF."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from htmltoadf.builder import convert_html_str_to_adf_str

_VERSION = "0.1.7"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="html2adf",
        description="Convert the given file to adf",
    )
    parser.add_argument(
        "inpath",
        nargs="?",
        type=Path,
        help="The path to the file to read; standard input when left out",
    )
    parser.add_argument(
        "-o",
        "--outpath",
        type=Path,
        help="The path to the file to write; standard output when left out",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_VERSION}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Convert HTML from a file or standard input and write the ADF JSON out.

    Returns the process exit status.
    """
    args = _parser().parse_args(argv)

    if args.inpath is not None:
        try:
            html = args.inpath.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            print(f"Something went wrong reading the input file: {error}", file=sys.stderr)
            return 1
    else:
        html = sys.stdin.read()

    adf = convert_html_str_to_adf_str(html)

    if args.outpath is not None:
        try:
            args.outpath.write_text(adf, encoding="utf-8")
        except OSError as error:
            print(f"Something went wrong writing output file: {error}", file=sys.stderr)
            return 1
    else:
        print(adf)
    return 0


if __name__ == "__main__":
    sys.exit(main())