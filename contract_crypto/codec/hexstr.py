"""
Hex text helpers shared by the value types and the reference host.

`strip_0x` drops an optional 0x/0X prefix. `unhex` is the strict decoder:
ASCII hex digits only, even length, no whitespace or separators.
"""

from __future__ import annotations

import binascii
from typing import Union


def strip_0x(s: str) -> str:
    return s[2:] if s.startswith(("0x", "0X")) else s


def unhex(text: Union[bytes, bytearray, memoryview]) -> bytes:
    """Decode hex text strictly; raises ValueError on anything but hex digit pairs."""
    try:
        return binascii.unhexlify(bytes(text))
    except binascii.Error as e:
        raise ValueError(f"not valid hex: {e}") from e


__all__ = ["strip_0x", "unhex"]
