"""Reading the zlib-compressed chunks that make up a save file body."""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass
from typing import BinaryIO

from .saveformat import SaveFormatError

PACKAGE_MAGIC = 0x9E2A83C1
ARCHIVE_MARKER = 0x22222222
MAX_CHUNK_SIZE = 512
COMPRESSOR_MARKER = 0x03000000

_HEADER = struct.Struct("<IIBIIQQQQ")


@dataclass
class CompressedChunkHeader:
    """The header that precedes each compressed chunk."""

    magic: int = 0
    hex2s: int = 0
    zero: int = 0
    max_chunk_size: int = 0
    hex03: int = 0
    compressed_size1: int = 0
    uncompressed_size1: int = 0
    compressed_size2: int = 0
    uncompressed_size2: int = 0

    def is_valid(self) -> bool:
        """Check the fixed markers and that the duplicated sizes agree."""
        return (
            self.magic == PACKAGE_MAGIC
            and self.hex2s == ARCHIVE_MARKER
            and self.zero == 0
            and self.max_chunk_size == MAX_CHUNK_SIZE
            and self.hex03 == COMPRESSOR_MARKER
            and self.compressed_size1 == self.compressed_size2
            and self.uncompressed_size1 == self.uncompressed_size2
        )


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    parts = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


def read_compressed_chunk(stream: BinaryIO) -> tuple[bytes, int] | None:
    """Read and inflate one chunk.

    Returns the inflated data and the uncompressed size the header declares,
    or None when the stream is already at its end.
    """
    raw = _read_exact(stream, _HEADER.size)
    if not raw:
        return None
    if len(raw) < _HEADER.size:
        raise SaveFormatError("truncated compressed chunk header")
    header = CompressedChunkHeader(*_HEADER.unpack(raw))
    if not header.is_valid():
        raise SaveFormatError("invalid compressed save file body")

    compressed = _read_exact(stream, header.compressed_size1)
    if len(compressed) < header.compressed_size1:
        raise SaveFormatError("reading compressed body: unexpected end of data")
    try:
        data = zlib.decompress(compressed)
    except zlib.error as exc:
        raise SaveFormatError(f"decompressing body: {exc}") from exc
    return data, header.uncompressed_size1


def decompress_body(stream: BinaryIO) -> tuple[bytes, int]:
    """Inflate all chunks that follow in the stream.

    Returns the joined data and the sum of the declared uncompressed sizes.
    """
    parts = []
    total_size = 0
    while True:
        chunk = read_compressed_chunk(stream)
        if chunk is None:
            break
        data, size = chunk
        if size == 0:
            break
        total_size += size
        parts.append(data)
    return b"".join(parts), total_size