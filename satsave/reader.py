"""A position-tracking binary reader for little-endian save data."""

from __future__ import annotations

import struct
from typing import BinaryIO, Callable

from .saveformat import ObjectReference, SaveFormatError

_U8 = struct.Struct("<B")
_I8 = struct.Struct("<b")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_U64 = struct.Struct("<Q")
_I64 = struct.Struct("<q")
_F32 = struct.Struct("<f")
_F64 = struct.Struct("<d")

_SKIP_BLOCK = 64 * 1024


class CountingReader:
    """Wraps a binary stream and counts the bytes read from it."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._total = 0

    def position(self) -> int:
        """Number of bytes read so far."""
        return self._total

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all remaining if negative)."""
        data = self._stream.read(size)
        self._total += len(data)
        return data

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` bytes or raise SaveFormatError."""
        parts = []
        remaining = size
        while remaining > 0:
            chunk = self.read(remaining)
            if not chunk:
                raise SaveFormatError(
                    f"unexpected end of data: wanted {size} bytes, got {size - remaining}"
                )
            parts.append(chunk)
            remaining -= len(chunk)
        return b"".join(parts)

    def read_rest(self) -> bytes:
        """Read everything left in the stream."""
        return self.read(-1)

    def skip(self, count: int) -> None:
        """Discard exactly ``count`` bytes."""
        remaining = count
        while remaining > 0:
            chunk = self.read(min(remaining, _SKIP_BLOCK))
            if not chunk:
                raise SaveFormatError(
                    f"unexpected end of data while skipping {count} bytes"
                )
            remaining -= len(chunk)

    def _unpack(self, layout: struct.Struct):
        return layout.unpack(self.read_exact(layout.size))[0]

    def u8(self) -> int:
        return self._unpack(_U8)

    def i8(self) -> int:
        return self._unpack(_I8)

    def u32(self) -> int:
        return self._unpack(_U32)

    def i32(self) -> int:
        return self._unpack(_I32)

    def u64(self) -> int:
        return self._unpack(_U64)

    def i64(self) -> int:
        return self._unpack(_I64)

    def f32(self) -> float:
        return self._unpack(_F32)

    def f64(self) -> float:
        return self._unpack(_F64)

    def string(self) -> str:
        """Read a length-prefixed string.

        A positive length means UTF-8 bytes, a negative one UTF-16LE code
        units; a trailing null terminator is dropped.
        """
        length = self.i32()
        if length == 0:
            return ""
        if length > 0:
            data = self.read_exact(length)
            if data[-1] == 0:
                data = data[:-1]
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise SaveFormatError(f"invalid UTF-8 string len: {length}") from exc
        data = self.read_exact(-length * 2)
        if data[-2:] == b"\x00\x00":
            data = data[:-2]
        return data.decode("utf-16-le", errors="replace")

    def object_reference(self) -> ObjectReference:
        """Read a level name followed by a path name."""
        level_name = self.string()
        path_name = self.string()
        return ObjectReference(level_name=level_name, path_name=path_name)


def read_and_skip(reader: CountingReader, read: Callable[[], int]) -> None:
    """Run ``read``, which returns the declared size of what it reads, and
    discard whatever part of that size it left unread."""
    start = reader.position()
    object_size = read()
    bytes_read = reader.position() - start
    if bytes_read > object_size:
        raise SaveFormatError("Read more bytes than expected")
    reader.skip(object_size - bytes_read)