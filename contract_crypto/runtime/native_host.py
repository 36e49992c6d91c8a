"""
contract_crypto.runtime.native_host — reference CryptoHost backed by real libraries.

Backends
--------
- SHA-1 / SHA-256 / SHA-512 : stdlib `hashlib`
- RIPEMD-160                : pycryptodome (`Crypto.Hash.RIPEMD160`); many
                              OpenSSL 3 builds no longer expose it via hashlib
- K1 / R1 key recovery      : `ecdsa` (SECP256k1 / NIST256p)
- RSA PKCS#1 v1.5 + SHA-256 : `cryptography`

Signature layout for recovery
-----------------------------
Signature.data is `header || r || s` (1 + 32 + 32 bytes). The header is
`27 + 4 + recid` for compressed keys (`27 + recid` is accepted as well);
recid must be 0 or 1 (y parity of R). The recovered key is returned as the
canonical PublicKey encoding with the same curve tag and a compressed point.

Host policy
-----------
- `fast_eval=True` elides every assert_* call (returns immediately).
- `max_input_bytes` caps hashed/verified payloads: oversized digest input is a
  HostFault, an oversized RSA message simply fails verification.
- RSA modulus text with a leading '0' is rejected (returns False).
- RSA hex parameters must be bare hex digit pairs; whitespace, separators
  and a 0x prefix are rejected (returns False).
"""

from __future__ import annotations

import hashlib
import logging
from typing import Callable, Dict

from Crypto.Hash import RIPEMD160
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from ecdsa import NIST256p, SECP256k1, VerifyingKey
from ecdsa.curves import Curve
from ecdsa.util import sigdecode_string

from contract_crypto.codec.hexstr import unhex
from contract_crypto.config import CryptoConfig
from contract_crypto.errors import (DecodeError, HostFault, InvalidInput,
                                    RecoveryError, VerificationMismatch)
from contract_crypto.types.keys import CurveType, PublicKey, Signature

log = logging.getLogger(__name__)

_CURVES: Dict[CurveType, Curve] = {
    CurveType.K1: SECP256k1,
    CurveType.R1: NIST256p,
}

_HEADER_BASE = 27
_HEADER_COMPRESSED = 4


def _ripemd160(b: bytes) -> bytes:
    return RIPEMD160.new(b).digest()


_DIGESTS: Dict[str, Callable[[bytes], bytes]] = {
    "sha256": lambda b: hashlib.sha256(b).digest(),
    "sha1": lambda b: hashlib.sha1(b).digest(),
    "sha512": lambda b: hashlib.sha512(b).digest(),
    "ripemd160": _ripemd160,
}


def _take(buf: memoryview, length: int, name: str) -> bytes:
    if length < 0 or length > memoryview(buf).nbytes:
        raise InvalidInput(f"{name} length {length} outside buffer of {memoryview(buf).nbytes} bytes")
    return bytes(memoryview(buf)[:length])


def _decode_hex(text: bytes, length: int, name: str) -> bytes:
    raw = _take(memoryview(text), length, name)
    if not raw:
        raise InvalidInput(f"{name} is empty")
    try:
        return unhex(raw)
    except ValueError as e:
        raise InvalidInput(f"{name} is not valid hex") from e


class NativeHost:
    """In-process host performing real cryptography."""

    def __init__(self, *, fast_eval: bool = False, max_input_bytes: int = 1 << 20) -> None:
        self.fast_eval = fast_eval
        self.max_input_bytes = max_input_bytes

    @classmethod
    def from_config(cls, cfg: CryptoConfig) -> "NativeHost":
        return cls(fast_eval=cfg.fast_eval, max_input_bytes=cfg.max_input_bytes)

    def __repr__(self) -> str:
        return f"NativeHost(fast_eval={self.fast_eval}, max_input_bytes={self.max_input_bytes})"

    # ---- digests ---- #

    def _digest(self, algo: str, data: memoryview, length: int) -> bytes:
        if length > self.max_input_bytes:
            raise HostFault(
                f"{algo} input too large ({length} bytes > {self.max_input_bytes})",
                context={"algo": algo, "length": length},
            )
        try:
            payload = _take(data, length, "data")
        except InvalidInput as e:
            raise HostFault(str(e), context={"algo": algo}) from e
        return _DIGESTS[algo](payload)

    def _assert_digest(self, algo: str, data: memoryview, length: int, digest: bytes) -> None:
        if self.fast_eval:
            log.debug("fast-eval: skipping assert_%s", algo)
            return
        actual = self._digest(algo, data, length)
        if actual != bytes(digest):
            raise VerificationMismatch(
                f"{algo} hash mismatch",
                context={"algo": algo, "expected": bytes(digest).hex(), "actual": actual.hex()},
            )

    def sha256(self, data: memoryview, length: int) -> bytes:
        return self._digest("sha256", data, length)

    def sha1(self, data: memoryview, length: int) -> bytes:
        return self._digest("sha1", data, length)

    def sha512(self, data: memoryview, length: int) -> bytes:
        return self._digest("sha512", data, length)

    def ripemd160(self, data: memoryview, length: int) -> bytes:
        return self._digest("ripemd160", data, length)

    def assert_sha256(self, data: memoryview, length: int, digest: bytes) -> None:
        self._assert_digest("sha256", data, length, digest)

    def assert_sha1(self, data: memoryview, length: int, digest: bytes) -> None:
        self._assert_digest("sha1", data, length, digest)

    def assert_sha512(self, data: memoryview, length: int, digest: bytes) -> None:
        self._assert_digest("sha512", data, length, digest)

    def assert_ripemd160(self, data: memoryview, length: int, digest: bytes) -> None:
        self._assert_digest("ripemd160", data, length, digest)

    # ---- key recovery ---- #

    def _recover(self, digest: bytes, sig: bytes) -> PublicKey:
        try:
            signature = Signature.deserialize(sig)
        except DecodeError as e:
            raise RecoveryError(f"malformed signature encoding: {e}") from e

        curve = _CURVES.get(signature.curve)
        if curve is None:
            raise RecoveryError(
                f"unsupported curve tag {signature.type}", context={"type": signature.type}
            )
        if len(digest) != 32:
            raise RecoveryError(f"digest must be 32 bytes, got {len(digest)}")

        header = signature.data[0]
        if not _HEADER_BASE <= header < _HEADER_BASE + 2 * _HEADER_COMPRESSED:
            raise RecoveryError(f"invalid recovery header {header}", context={"header": header})
        recid = (header - _HEADER_BASE) & 3
        if recid > 1:
            raise RecoveryError(f"unsupported recovery id {recid}", context={"recid": recid})

        rs = signature.data[1:]
        n = curve.order
        r = int.from_bytes(rs[:32], "big")
        s = int.from_bytes(rs[32:], "big")
        if not (0 < r < n and 0 < s < n):
            raise RecoveryError("signature r/s out of range")

        try:
            # candidates are ordered [even-y R, odd-y R]
            candidates = VerifyingKey.from_public_key_recovery_with_digest(
                rs, digest, curve, hashfunc=hashlib.sha256, sigdecode=sigdecode_string
            )
            point = candidates[recid].to_string("compressed")
        except Exception as e:
            raise RecoveryError(f"key recovery failed: {e}") from e
        return PublicKey(type=signature.type, data=point)

    def recover_key(self, digest: bytes, sig: bytes) -> bytes:
        return self._recover(bytes(digest), bytes(sig)).serialize()

    def assert_recover_key(self, digest: bytes, sig: bytes, pubkey: bytes) -> None:
        if self.fast_eval:
            log.debug("fast-eval: skipping assert_recover_key")
            return
        recovered = self._recover(bytes(digest), bytes(sig)).serialize()
        if recovered != bytes(pubkey):
            raise VerificationMismatch(
                "public key does not match",
                context={"expected": bytes(pubkey).hex(), "recovered": recovered.hex()},
            )

    # ---- RSA ---- #

    def verify_rsa_sha256_sig(
        self,
        message: memoryview,
        message_len: int,
        sig: bytes,
        sig_len: int,
        exp: bytes,
        exp_len: int,
        mod: bytes,
        mod_len: int,
    ) -> bool:
        if message_len > self.max_input_bytes:
            log.debug("rsa: message too large (%d bytes)", message_len)
            return False
        try:
            msg = _take(message, message_len, "message")
            mod_text = _take(memoryview(mod), mod_len, "modulus")
            if mod_text.startswith(b"0"):
                raise InvalidInput("modulus has a leading zero")
            sig_b = _decode_hex(sig, sig_len, "signature")
            exp_b = _decode_hex(exp, exp_len, "exponent")
            mod_b = _decode_hex(mod, mod_len, "modulus")
        except InvalidInput as e:
            log.debug("rsa: rejected input: %s", e)
            return False

        e_int = int.from_bytes(exp_b, "big")
        n_int = int.from_bytes(mod_b, "big")
        try:
            key = rsa.RSAPublicNumbers(e_int, n_int).public_key()
            key.verify(sig_b, msg, padding.PKCS1v15(), hashes.SHA256())
        except InvalidSignature:
            return False
        except ValueError as e:
            log.debug("rsa: invalid public key: %s", e)
            return False
        return True


__all__ = ["NativeHost"]
