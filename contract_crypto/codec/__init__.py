"""
contract_crypto.codec
=====================

Low-level building blocks for the canonical encodings.
"""

from .hexstr import strip_0x, unhex
from .varint import UINT32_MAX, uvarint_decode, uvarint_encode, uvarint_size

__all__ = ["UINT32_MAX", "uvarint_encode", "uvarint_decode", "uvarint_size", "strip_0x", "unhex"]
