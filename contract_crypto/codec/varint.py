"""
Unsigned LEB128 varints, as used for curve-type tags.

- uvarint_encode(n) -> bytes              minimal-length representation
- uvarint_decode(buf, offset) -> (n, j)   inverse, returns the new offset

The on-chain tag is a 32-bit `unsigned_int`, so both directions default to
`max_value=UINT32_MAX`; a 32-bit value never needs more than 5 bytes.
"""

from __future__ import annotations

from typing import Optional, Tuple

from contract_crypto.errors import DecodeError

UINT32_MAX = (1 << 32) - 1

__all__ = ["UINT32_MAX", "uvarint_encode", "uvarint_decode", "uvarint_size"]


def uvarint_encode(n: int, *, max_value: int = UINT32_MAX) -> bytes:
    """
    Unsigned LEB128 encoding.

    - n must be an int in [0, max_value]
    - returns minimal-length representation
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError("uvarint value must be int")
    if n < 0:
        raise ValueError("uvarint cannot encode negative values")
    if n > max_value:
        raise ValueError(f"uvarint value {n} exceeds {max_value}")
    out = bytearray()
    while True:
        b = n & 0x7F
        n >>= 7
        if n:
            out.append(b | 0x80)
        else:
            out.append(b)
            break
    return bytes(out)


def uvarint_size(n: int) -> int:
    """Number of bytes uvarint_encode(n) produces."""
    return max(1, (n.bit_length() + 6) // 7)


def uvarint_decode(
    buf: bytes,
    offset: int = 0,
    *,
    max_value: int = UINT32_MAX,
    strict: Optional[bool] = None,
) -> Tuple[int, int]:
    """
    Decode unsigned LEB128 at buf[offset:].
    Returns (value, new_offset).

    Raises DecodeError when the varint is truncated, exceeds `max_value`, or
    (strict mode) uses a non-minimal encoding such as b"\\x80\\x00".
    `strict=None` follows CONTRACT_CRYPTO_STRICT_VARINT.
    """
    if strict is None:
        from contract_crypto.config import load_config

        strict = load_config().strict_varint

    max_len = uvarint_size(max_value)
    n = 0
    shift = 0
    i = offset
    while i < len(buf):
        b = buf[i]
        i += 1
        n |= (b & 0x7F) << shift
        if (b & 0x80) == 0:
            if strict and b == 0 and i - offset > 1:
                raise DecodeError(
                    "non-minimal uvarint", context={"offset": offset}
                )
            if n > max_value:
                raise DecodeError(
                    f"uvarint value {n} exceeds {max_value}", context={"offset": offset}
                )
            return n, i
        shift += 7
        if i - offset >= max_len:
            raise DecodeError("uvarint too long", context={"offset": offset})
    raise DecodeError("truncated uvarint", context={"offset": offset})
