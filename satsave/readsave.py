"""Reading a whole save file: header, compressed chunks and body."""

from __future__ import annotations

import io
import logging
import math
import threading
import time
from typing import BinaryIO, Callable

from .body import read_save_file_body
from .compressed import decompress_body
from .reader import CountingReader
from .saveformat import SaveFileBody, SaveFileHeader

logger = logging.getLogger(__name__)

STATUS_INTERVAL = 1.0


class StatusTicker:
    """Calls a function at a fixed interval on a background thread."""

    def __init__(self, interval: float, status_fn: Callable[[], None]) -> None:
        self.interval = interval
        self.status_fn = status_fn
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            self.status_fn()

    def start(self) -> None:
        """Start calling the function every interval."""
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the calls and wait for the background thread to finish."""
        if self._thread is None:
            raise RuntimeError("status ticker was not started")
        self._stopped.set()
        self._thread.join()
        self._thread = None

    def __enter__(self) -> StatusTicker:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def read_header(stream: BinaryIO) -> SaveFileHeader:
    """Read the uncompressed header at the start of a save file."""
    reader = CountingReader(stream)
    header = SaveFileHeader(
        save_header_version=reader.u32(),
        save_version=reader.u32(),
        build_version=reader.u32(),
    )
    if header.save_header_version >= 14:
        header.save_name = reader.string()
    header.map_name = reader.string()
    header.map_options = reader.string()
    header.session_name = reader.string()
    header.played_seconds = reader.u32()
    header.save_timestamp_ticks = reader.u64()
    header.session_visibility = reader.u8()
    header.editor_object_version = reader.u32()
    header.mod_metadata = reader.string()
    header.mod_flags = reader.u32()
    header.save_identifier = reader.string()
    if header.save_header_version >= 13:
        header.unknown1 = reader.u32()
        header.unknown2 = reader.u32()
        header.session_random1 = reader.u64()
        header.session_random2 = reader.u64()
        header.cheat_flag = reader.u32()
    return header


def _divide(numerator: float, denominator: float) -> float:
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


def status_line(position: int, total: int, elapsed: float) -> str:
    """Format progress through ``total`` bytes and the estimated time left."""
    percent = _divide(float(position), float(total)) * 100.0
    percent_rate = _divide(percent, float(elapsed))
    eta = _divide(100.0 - percent, percent_rate)
    return f"Progress {percent:.2f}% ETA: {eta:.2f}s"


def read_save(stream: BinaryIO) -> SaveFileBody:
    """Read a save file from a binary stream and return its body."""
    header = read_header(stream)
    logger.info(
        "Save name: %s, Version: %d-%d-%d",
        header.session_name,
        header.save_version,
        header.save_header_version,
        header.build_version,
    )

    logger.info("Decompressing save file body")
    data, total_size = decompress_body(stream)
    reader = CountingReader(io.BytesIO(data))

    start = time.monotonic()

    def report() -> None:
        logger.info(status_line(reader.position(), total_size, time.monotonic() - start))

    with StatusTicker(STATUS_INTERVAL, report):
        body = read_save_file_body(reader, header.save_version)

    logger.info("Done reading in %.2fs", time.monotonic() - start)
    return body