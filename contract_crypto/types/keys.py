"""
Public keys and signatures with a curve-type tag.

Canonical serialization (consensus-critical, byte-stable)
---------------------------------------------------------
    PublicKey:  uvarint(type) || data[33]     (compressed EC point)
    Signature:  uvarint(type) || data[65]     (recovery header || r || s)

`type` is kept as the raw integer tag. `CurveType.from_tag` interprets it,
mapping unrecognized tags to CurveType.UNKNOWN, so values tagged with curves
added later still decode and re-serialize to identical bytes.

Equality and ordering compare `(type, data)` lexicographically; there is no
curve-aware equality.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Tuple, Type, TypeVar, Union

from contract_crypto.codec.hexstr import strip_0x
from contract_crypto.codec.varint import UINT32_MAX, uvarint_decode, uvarint_encode
from contract_crypto.errors import DecodeError

BytesLike = Union[bytes, bytearray, memoryview]

K = TypeVar("K", bound="_TaggedBytes")

PUBLIC_KEY_DATA_SIZE = 33
SIGNATURE_DATA_SIZE = 65


class CurveType(enum.IntEnum):
    K1 = 0
    R1 = 1
    # Fallback for tags this version does not know; never serialized as -1.
    UNKNOWN = -1

    @classmethod
    def from_tag(cls, tag: int) -> "CurveType":
        if tag < 0:
            raise ValueError(f"curve tag must be non-negative, got {tag}")
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


def _coerce_tag(tag: object) -> int:
    if isinstance(tag, CurveType):
        if tag is CurveType.UNKNOWN:
            raise ValueError("CurveType.UNKNOWN is not a concrete tag; pass the raw integer")
        return int(tag)
    if not isinstance(tag, int) or isinstance(tag, bool):
        raise TypeError(f"curve tag must be int, got {type(tag).__name__}")
    if tag < 0 or tag > UINT32_MAX:
        raise ValueError(f"curve tag {tag} out of range for unsigned_int")
    return tag


@dataclass(frozen=True, order=True)
class _TaggedBytes:
    type: int
    data: bytes

    DATA_SIZE: ClassVar[int] = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", _coerce_tag(self.type))
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"{type(self).__name__} data must be bytes-like, got {type(self.data).__name__}"
            )
        b = bytes(self.data)
        if len(b) != self.DATA_SIZE:
            raise DecodeError(
                f"{type(self).__name__} data must be {self.DATA_SIZE} bytes, got {len(b)}",
                context={"expected": self.DATA_SIZE, "got": len(b)},
            )
        object.__setattr__(self, "data", b)

    @property
    def curve(self) -> CurveType:
        return CurveType.from_tag(self.type)

    def __repr__(self) -> str:
        curve = self.curve
        tag = curve.name if curve is not CurveType.UNKNOWN else f"tag={self.type}"
        return f"{type(self).__name__}({tag}, {self.data.hex()})"

    def __bytes__(self) -> bytes:
        return self.serialize()

    def serialize(self) -> bytes:
        return uvarint_encode(self.type) + self.data

    def hex(self) -> str:
        return self.serialize().hex()

    @classmethod
    def unpack_from(cls: Type[K], buf: BytesLike, offset: int = 0) -> Tuple[K, int]:
        """
        Read one value at buf[offset:] without checking for trailing bytes.
        Returns (value, new_offset).
        """
        mv = memoryview(buf).cast("B")
        tag, i = uvarint_decode(mv, offset)
        end = i + cls.DATA_SIZE
        if end > len(mv):
            raise DecodeError(
                f"truncated {cls.__name__}: need {cls.DATA_SIZE} data bytes, have {len(mv) - i}",
                context={"offset": offset},
            )
        return cls(type=tag, data=bytes(mv[i:end])), end

    @classmethod
    def deserialize(cls: Type[K], buf: BytesLike) -> K:
        """Strict decode: exactly one value, no trailing bytes."""
        value, end = cls.unpack_from(buf)
        total = memoryview(buf).nbytes
        if end != total:
            raise DecodeError(
                f"trailing bytes after {cls.__name__}",
                context={"trailing": total - end},
            )
        return value

    @classmethod
    def from_hex(cls: Type[K], text: str) -> K:
        try:
            raw = bytes.fromhex(strip_0x(text.strip()))
        except ValueError as e:
            raise DecodeError(f"invalid hex for {cls.__name__}: {text!r}") from e
        return cls.deserialize(raw)


class PublicKey(_TaggedBytes):
    """Compressed elliptic-curve public key: curve tag + 33-byte point."""

    DATA_SIZE = PUBLIC_KEY_DATA_SIZE


class Signature(_TaggedBytes):
    """Recoverable signature: curve tag + 65 bytes (header || r || s)."""

    DATA_SIZE = SIGNATURE_DATA_SIZE


def serialize(value: _TaggedBytes) -> bytes:
    return value.serialize()


def equals(a: _TaggedBytes, b: _TaggedBytes) -> bool:
    """Structural equality over (type, data); different kinds never match."""
    return type(a) is type(b) and (a.type, a.data) == (b.type, b.data)


__all__ = [
    "CurveType",
    "PublicKey",
    "Signature",
    "PUBLIC_KEY_DATA_SIZE",
    "SIGNATURE_DATA_SIZE",
    "serialize",
    "equals",
]
