"""Parsing save files from disk, and the command that does it."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .readsave import read_save
from .saveformat import SaveFileBody, SaveFormatError


def parse_save_file(path: str | os.PathLike[str]) -> SaveFileBody:
    """Open and read the save file at ``path`` and return its body."""
    with open(path, "rb") as stream:
        return read_save(stream)


def main(argv: list[str] | None = None) -> int:
    """Parse a save file named on the command line and report its size."""
    arg_parser = argparse.ArgumentParser(
        prog="satsave", description="Parse a save file and report on it."
    )
    arg_parser.add_argument("save_file", help="path of the save file to parse")
    args = arg_parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        body = parse_save_file(args.save_file)
    except (OSError, SaveFormatError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print("Save file parsed successfully!", body.uncompressed_size)
    return 0


if __name__ == "__main__":
    sys.exit(main())