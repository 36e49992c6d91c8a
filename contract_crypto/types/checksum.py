"""
Fixed-width digest values: Checksum160, Checksum256, Checksum512.

These are plain immutable byte containers (20/32/64 bytes). They are produced
by the host's hash primitives or supplied by callers for comparison. The
canonical serialization is the raw bytes with no length prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Tuple, Type, TypeVar, Union

from contract_crypto.codec.hexstr import strip_0x
from contract_crypto.errors import DecodeError

BytesLike = Union[bytes, bytearray, memoryview]

C = TypeVar("C", bound="FixedBytes")


@dataclass(frozen=True, order=True)
class FixedBytes:
    data: bytes

    SIZE: ClassVar[int] = 0

    def __post_init__(self) -> None:
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"{type(self).__name__} data must be bytes-like, got {type(self.data).__name__}"
            )
        b = bytes(self.data)
        if len(b) != self.SIZE:
            raise DecodeError(
                f"{type(self).__name__} must be {self.SIZE} bytes, got {len(b)}",
                context={"expected": self.SIZE, "got": len(b)},
            )
        object.__setattr__(self, "data", b)

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return self.SIZE

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data.hex()})"

    def hex(self) -> str:
        return self.data.hex()

    @classmethod
    def from_hex(cls: Type[C], text: str) -> C:
        try:
            raw = bytes.fromhex(strip_0x(text.strip()))
        except ValueError as e:
            raise DecodeError(f"invalid hex for {cls.__name__}: {text!r}") from e
        return cls(raw)

    @classmethod
    def zero(cls: Type[C]) -> C:
        return cls(bytes(cls.SIZE))

    def serialize(self) -> bytes:
        return self.data

    @classmethod
    def unpack_from(cls: Type[C], buf: BytesLike, offset: int = 0) -> Tuple[C, int]:
        """Read one value at buf[offset:]; returns (value, new_offset)."""
        mv = memoryview(buf).cast("B")
        end = offset + cls.SIZE
        if end > len(mv):
            raise DecodeError(
                f"truncated {cls.__name__}: need {cls.SIZE} bytes at offset {offset}",
                context={"offset": offset, "available": max(0, len(mv) - offset)},
            )
        return cls(bytes(mv[offset:end])), end

    @classmethod
    def deserialize(cls: Type[C], buf: BytesLike) -> C:
        value, end = cls.unpack_from(buf)
        if end != memoryview(buf).nbytes:
            raise DecodeError(
                f"trailing bytes after {cls.__name__}",
                context={"trailing": memoryview(buf).nbytes - end},
            )
        return value


class Checksum160(FixedBytes):
    """20-byte digest (SHA-1, RIPEMD-160)."""

    SIZE = 20


class Checksum256(FixedBytes):
    """32-byte digest (SHA-256)."""

    SIZE = 32


class Checksum512(FixedBytes):
    """64-byte digest (SHA-512)."""

    SIZE = 64


__all__ = ["FixedBytes", "Checksum160", "Checksum256", "Checksum512"]
