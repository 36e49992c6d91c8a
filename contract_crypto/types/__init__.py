"""
contract_crypto.types
=====================

Value types with canonical, consensus-stable byte layouts:

- Checksum160 / Checksum256 / Checksum512 : fixed-width digests
- CurveType                               : curve discriminant (K1, R1, UNKNOWN)
- PublicKey                               : tag + 33-byte compressed point
- Signature                               : tag + 65-byte recoverable signature
"""

from .checksum import Checksum160, Checksum256, Checksum512, FixedBytes
from .keys import (PUBLIC_KEY_DATA_SIZE, SIGNATURE_DATA_SIZE, CurveType,
                   PublicKey, Signature, equals, serialize)

__all__ = [
    "FixedBytes",
    "Checksum160",
    "Checksum256",
    "Checksum512",
    "CurveType",
    "PublicKey",
    "Signature",
    "PUBLIC_KEY_DATA_SIZE",
    "SIGNATURE_DATA_SIZE",
    "equals",
    "serialize",
]
