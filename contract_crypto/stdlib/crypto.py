"""
Digest, digest-assertion and key-recovery helpers exposed to contracts.

Surface:
    sha256(data) -> Checksum256         assert_sha256(data, expected)
    sha1(data) -> Checksum160           assert_sha1(data, expected)
    sha512(data) -> Checksum512         assert_sha512(data, expected)
    ripemd160(data) -> Checksum160      assert_ripemd160(data, expected)
    recover_key(digest, sig) -> PublicKey
    assert_recover_key(digest, sig, expected_key)

`data` is anything `buffer_view` accepts (bytes-like, str, BufferView). Each
operation makes exactly one host call. The assert_* family and key recovery
abort fatally (VerificationMismatch / RecoveryError / HostFault); callers
must not catch those. A host running in fast-evaluation mode may skip the
assertions entirely, so they carry no observable effect beyond pass/fail.
"""

from __future__ import annotations

from typing import Type, TypeVar, Union

from contract_crypto.errors import DecodeError, HostFault
from contract_crypto.runtime.buffer import MessageSource, buffer_view
from contract_crypto.runtime.host import host_call
from contract_crypto.types.checksum import (Checksum160, Checksum256,
                                            Checksum512, FixedBytes)
from contract_crypto.types.keys import PublicKey, Signature

C = TypeVar("C", bound=FixedBytes)

DigestLike = Union[FixedBytes, bytes, bytearray, memoryview]


def _as_checksum(value: DigestLike, cls: Type[C], name: str) -> C:
    if isinstance(value, cls):
        return value
    if isinstance(value, FixedBytes):
        raise TypeError(f"{name} must be {cls.__name__}, got {type(value).__name__}")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return cls(bytes(value))
    raise TypeError(f"{name} must be {cls.__name__} or bytes, got {type(value).__name__}")


def _digest(call: str, data: MessageSource, cls: Type[C]) -> C:
    view = buffer_view(data)
    out = host_call(call, view.data, view.length)
    try:
        return cls(out)
    except (DecodeError, TypeError) as e:
        raise HostFault(f"host {call} returned a malformed digest: {e}", context={"call": call}) from e


def _assert_digest(call: str, data: MessageSource, expected: DigestLike, cls: Type[C]) -> None:
    want = _as_checksum(expected, cls, "expected")
    view = buffer_view(data)
    host_call(call, view.data, view.length, want.data)


def sha256(data: MessageSource) -> Checksum256:
    """SHA-256 of data (32 bytes)."""
    return _digest("sha256", data, Checksum256)


def sha1(data: MessageSource) -> Checksum160:
    """SHA-1 of data (20 bytes)."""
    return _digest("sha1", data, Checksum160)


def sha512(data: MessageSource) -> Checksum512:
    """SHA-512 of data (64 bytes)."""
    return _digest("sha512", data, Checksum512)


def ripemd160(data: MessageSource) -> Checksum160:
    """RIPEMD-160 of data (20 bytes)."""
    return _digest("ripemd160", data, Checksum160)


def assert_sha256(data: MessageSource, expected: DigestLike) -> None:
    _assert_digest("assert_sha256", data, expected, Checksum256)


def assert_sha1(data: MessageSource, expected: DigestLike) -> None:
    _assert_digest("assert_sha1", data, expected, Checksum160)


def assert_sha512(data: MessageSource, expected: DigestLike) -> None:
    _assert_digest("assert_sha512", data, expected, Checksum512)


def assert_ripemd160(data: MessageSource, expected: DigestLike) -> None:
    _assert_digest("assert_ripemd160", data, expected, Checksum160)


def _require_signature(sig: object) -> Signature:
    if not isinstance(sig, Signature):
        raise TypeError(f"sig must be Signature, got {type(sig).__name__}")
    return sig


def recover_key(digest: DigestLike, sig: Signature) -> PublicKey:
    """
    Recover the public key whose private key produced `sig` over `digest`.

    The host receives the 32 digest bytes and the canonical signature encoding
    and answers with a canonical PublicKey encoding.
    """
    d = _as_checksum(digest, Checksum256, "digest")
    encoded = host_call("recover_key", d.data, _require_signature(sig).serialize())
    try:
        return PublicKey.deserialize(encoded)
    except (DecodeError, TypeError) as e:
        raise HostFault(f"host recover_key returned a malformed key: {e}") from e


def assert_recover_key(digest: DigestLike, sig: Signature, expected_key: PublicKey) -> None:
    """Abort unless recovering `sig` over `digest` yields exactly `expected_key`."""
    d = _as_checksum(digest, Checksum256, "digest")
    if not isinstance(expected_key, PublicKey):
        raise TypeError(f"expected_key must be PublicKey, got {type(expected_key).__name__}")
    host_call(
        "assert_recover_key",
        d.data,
        _require_signature(sig).serialize(),
        expected_key.serialize(),
    )


__all__ = (
    "sha256",
    "sha1",
    "sha512",
    "ripemd160",
    "assert_sha256",
    "assert_sha1",
    "assert_sha512",
    "assert_ripemd160",
    "recover_key",
    "assert_recover_key",
)
