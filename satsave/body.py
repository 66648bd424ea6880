"""Reading the decompressed body of a save file."""

from __future__ import annotations

import logging

from .levels import read_level_data
from .reader import CountingReader
from .saveformat import LevelGroupingGrid, LevelInfo, SaveFileBody, SaveFormatError

logger = logging.getLogger(__name__)

GRID_COUNT = 5


def read_level_grouping_grid(reader: CountingReader) -> LevelGroupingGrid:
    """Read one level grouping grid and its level entries."""
    grid = LevelGroupingGrid(
        grid_name=reader.string(),
        unknown1=reader.u32(),
        unknown2=reader.u32(),
        level_count=reader.u32(),
    )
    for _ in range(grid.level_count):
        string_value = reader.string()
        grid.level_infos.append(LevelInfo(string_value=string_value, int_value=reader.u32()))
    return grid


def read_reference_list(reader: CountingReader, body: SaveFileBody) -> None:
    """Read the trailing object reference list into ``body``.

    A damaged list is reported and whatever was read before the damage is kept.
    """
    try:
        body.reference_list_count = reader.u32()
        for _ in range(body.reference_list_count):
            body.references.append(reader.object_reference())
    except SaveFormatError as exc:
        logger.warning("Error reading ref list, skipping: %s", exc)


def read_save_file_body(reader: CountingReader, version: int) -> SaveFileBody:
    """Read the whole decompressed body for a save of the given version."""
    body = SaveFileBody(
        uncompressed_size=reader.u64(),
        value6=reader.u32(),
        none_string1=reader.string(),
        value0=reader.u32(),
        unknown1=reader.u32(),
        value1=reader.u32(),
        none_string2=reader.string(),
        unknown2=reader.u32(),
    )
    if not body.is_valid():
        raise SaveFormatError("Invalid save file body")

    body.level_grouping_grids = [read_level_grouping_grid(reader) for _ in range(GRID_COUNT)]

    body.sub_level_count = reader.u32()
    body.levels = [
        read_level_data(reader, version, False) for _ in range(body.sub_level_count)
    ]

    logger.info("Reading persistent level data ...")
    body.levels.append(read_level_data(reader, version, True))

    read_reference_list(reader, body)

    left = reader.read_rest()
    if left:
        logger.warning("Warning - Left bytes after reading body: %d", len(left))
    return body