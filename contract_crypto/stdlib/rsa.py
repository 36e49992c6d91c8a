"""
RSA signature verification (PKCS#1 v1.5 over SHA-256) for contracts.

Surface:
    verify_rsa_sha256_sig_raw(message, message_len, signature, exponent, modulus) -> bool
    verify_rsa_sha256_sig(message, signature, exponent, modulus) -> bool

`signature`, `exponent` and `modulus` are hex text (str or bytes). They are
handed to the host verbatim with an explicit length; decoding the hex is the
host's job. The modulus must not carry a leading zero (the host rejects it).

The message may be a BufferView, a str (UTF-8), or any buffer-protocol object.
Buffers of multi-byte elements (array.array("I", ...), BufferView.from_array)
count their raw byte size, not their element count. Every shape is normalized
to a single (data, length) pair and verified with exactly one host call.

Verification failure of any kind (bad signature, malformed hex, disallowed
modulus) returns False; this module never aborts on bad cryptographic input.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from contract_crypto.errors import InvalidInput
from contract_crypto.runtime.buffer import BufferView, MessageSource, buffer_view
from contract_crypto.runtime.host import host_call

log = logging.getLogger(__name__)

HexText = Union[str, bytes, bytearray, memoryview]


def _text(value: HexText, name: str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be hex text (str or bytes), got {type(value).__name__}")


def verify_rsa_sha256_sig_raw(
    message: Any,
    message_len: int,
    signature: HexText,
    exponent: HexText,
    modulus: HexText,
) -> bool:
    """
    Canonical entry point: `message` is a raw buffer, `message_len` the number
    of its bytes to verify.
    """
    view = BufferView.from_raw(message, message_len)
    sig = _text(signature, "signature")
    exp = _text(exponent, "exponent")
    mod = _text(modulus, "modulus")
    try:
        ok = host_call(
            "verify_rsa_sha256_sig",
            view.data,
            view.length,
            sig,
            len(sig),
            exp,
            len(exp),
            mod,
            len(mod),
        )
    except InvalidInput as e:
        log.debug("rsa: host rejected input: %s", e)
        return False
    return bool(ok)


def verify_rsa_sha256_sig(
    message: MessageSource,
    signature: HexText,
    exponent: HexText,
    modulus: HexText,
) -> bool:
    """Verify `signature` over SHA-256(message) for the key (exponent, modulus)."""
    view = buffer_view(message)
    return verify_rsa_sha256_sig_raw(view.data, view.length, signature, exponent, modulus)


__all__ = ("verify_rsa_sha256_sig", "verify_rsa_sha256_sig_raw")
