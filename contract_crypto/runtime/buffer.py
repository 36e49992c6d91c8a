"""
contract_crypto.runtime.buffer — (pointer, length) descriptors for host calls.

Every host call takes a flat byte buffer plus an explicit byte length. Callers
hold messages in many shapes, so each accepted shape has its own explicit
constructor that produces a uniform BufferView:

    BufferView.from_raw(buf, length)         raw buffer + explicit byte length
    BufferView.from_text(text)               UTF-8 bytes of a str
    BufferView.from_bytes(buf)               any buffer-protocol object;
                                             length = nbytes (itemsize * count)
    BufferView.from_elements(values, fmt)    sequence of numbers packed as
                                             little-endian `struct` elements
    BufferView.from_array(values, fmt, n)    same, with a fixed element count

`buffer_view(source)` is the one generic conversion; it only accepts sources
that are already contiguous bytes (BufferView, str, buffer protocol). Lengths
are always raw bytes, never element counts.
"""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Any, Sequence, Union

__all__ = ["SourceKind", "BufferView", "buffer_view", "MessageSource"]


class SourceKind(enum.Enum):
    RAW = "raw"
    TEXT = "text"
    BYTES = "bytes"
    ELEMENTS = "elements"
    ARRAY = "array"


def _flat_bytes(buf: Any) -> memoryview:
    """Return a 1-D unsigned-byte view over `buf` without copying when possible."""
    try:
        mv = memoryview(buf)
    except TypeError as e:
        raise TypeError(
            f"expected a buffer-protocol object, got {type(buf).__name__}"
        ) from e
    if not mv.c_contiguous:
        raise ValueError("buffer must be C-contiguous")
    if mv.format == "B" and mv.ndim == 1:
        return mv
    try:
        return mv.cast("B")
    except TypeError:
        # Non-native formats (e.g. '<u4') cannot be cast in place.
        return memoryview(mv.tobytes())


def _pack(values: Sequence[Any], fmt: str) -> bytes:
    if len(fmt) != 1 or fmt not in "bBhHiIlLqQefd":
        raise ValueError(f"unsupported element format {fmt!r}")
    try:
        return struct.pack(f"<{len(values)}{fmt}", *values)
    except struct.error as e:
        raise ValueError(f"cannot pack elements as {fmt!r}: {e}") from e


@dataclass(frozen=True, eq=False)
class BufferView:
    """Immutable (data, length) pair; `length` counts bytes."""

    data: memoryview
    length: int
    kind: SourceKind = SourceKind.BYTES

    def __post_init__(self) -> None:
        if not isinstance(self.data, memoryview) or self.data.format != "B" or self.data.ndim != 1:
            raise TypeError("BufferView.data must be a 1-D unsigned-byte memoryview")
        if not isinstance(self.length, int) or isinstance(self.length, bool):
            raise TypeError(f"length must be int, got {type(self.length).__name__}")
        if self.length < 0:
            raise ValueError(f"length must be non-negative, got {self.length}")
        if self.length > self.data.nbytes:
            raise ValueError(
                f"length {self.length} exceeds buffer size {self.data.nbytes}"
            )

    def __len__(self) -> int:
        return self.length

    def tobytes(self) -> bytes:
        return self.data[: self.length].tobytes()

    # ---- constructors ---- #

    @classmethod
    def from_raw(cls, buf: Any, length: int) -> "BufferView":
        return cls(_flat_bytes(buf), length, SourceKind.RAW)

    @classmethod
    def from_text(cls, text: str) -> "BufferView":
        if not isinstance(text, str):
            raise TypeError(f"text must be str, got {type(text).__name__}")
        raw = text.encode("utf-8")
        return cls(memoryview(raw), len(raw), SourceKind.TEXT)

    @classmethod
    def from_bytes(cls, buf: Any) -> "BufferView":
        mv = _flat_bytes(buf)
        return cls(mv, mv.nbytes, SourceKind.BYTES)

    @classmethod
    def from_elements(cls, values: Sequence[Any], fmt: str) -> "BufferView":
        raw = _pack(values, fmt)
        return cls(memoryview(raw), len(raw), SourceKind.ELEMENTS)

    @classmethod
    def from_array(cls, values: Sequence[Any], fmt: str, n: int) -> "BufferView":
        if len(values) != n:
            raise ValueError(f"fixed array expects {n} elements, got {len(values)}")
        raw = _pack(values, fmt)
        return cls(memoryview(raw), len(raw), SourceKind.ARRAY)


MessageSource = Union[BufferView, str, bytes, bytearray, memoryview]


def buffer_view(source: Any) -> BufferView:
    """
    Normalize a contiguous byte-representable source to a BufferView.

    Accepted: BufferView (returned as-is), str (UTF-8), or any object that
    supports the buffer protocol (bytes, bytearray, memoryview, array.array,
    numpy arrays, ...). Multi-byte element buffers contribute itemsize * count
    bytes.
    """
    if isinstance(source, BufferView):
        return source
    if isinstance(source, str):
        return BufferView.from_text(source)
    return BufferView.from_bytes(source)
