from __future__ import annotations

import hashlib
from typing import Any, List, Optional, Tuple

import pytest

from contract_crypto.errors import VerificationMismatch
from contract_crypto.runtime.host import reset_host, use_host
from contract_crypto.runtime.native_host import NativeHost

_SIZES = {"sha256": 32, "sha1": 20, "sha512": 64, "ripemd160": 20}


class FakeHost:
    """
    Deterministic host double. Digests are keyed BLAKE2b (not the real
    algorithms), recovery answers a fixed encoded key, RSA answers a fixed
    bool. Every boundary call is recorded in `calls` as (name, args).
    """

    def __init__(
        self,
        *,
        recovered: bytes = b"",
        rsa_result: bool = True,
        fail_with: Optional[BaseException] = None,
    ) -> None:
        self.recovered = recovered
        self.rsa_result = rsa_result
        self.fail_with = fail_with
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def digest_of(algo: str, payload: bytes) -> bytes:
        return hashlib.blake2b(payload, digest_size=_SIZES[algo], person=algo.encode()).digest()

    def _digest(self, algo: str, data: memoryview, length: int) -> bytes:
        self._record(algo, bytes(data[:length]), length)
        return self.digest_of(algo, bytes(data[:length]))

    def _assert(self, algo: str, data: memoryview, length: int, digest: bytes) -> None:
        self._record("assert_" + algo, bytes(data[:length]), length, bytes(digest))
        if self.digest_of(algo, bytes(data[:length])) != bytes(digest):
            raise VerificationMismatch(f"{algo} hash mismatch")

    def sha256(self, data, length):
        return self._digest("sha256", data, length)

    def sha1(self, data, length):
        return self._digest("sha1", data, length)

    def sha512(self, data, length):
        return self._digest("sha512", data, length)

    def ripemd160(self, data, length):
        return self._digest("ripemd160", data, length)

    def assert_sha256(self, data, length, digest):
        self._assert("sha256", data, length, digest)

    def assert_sha1(self, data, length, digest):
        self._assert("sha1", data, length, digest)

    def assert_sha512(self, data, length, digest):
        self._assert("sha512", data, length, digest)

    def assert_ripemd160(self, data, length, digest):
        self._assert("ripemd160", data, length, digest)

    def recover_key(self, digest, sig):
        self._record("recover_key", bytes(digest), bytes(sig))
        return self.recovered

    def assert_recover_key(self, digest, sig, pubkey):
        self._record("assert_recover_key", bytes(digest), bytes(sig), bytes(pubkey))
        if bytes(pubkey) != self.recovered:
            raise VerificationMismatch("public key does not match")

    def verify_rsa_sha256_sig(self, message, message_len, sig, sig_len, exp, exp_len, mod, mod_len):
        self._record(
            "verify_rsa_sha256_sig",
            bytes(message[:message_len]),
            message_len,
            bytes(sig),
            sig_len,
            bytes(exp),
            exp_len,
            bytes(mod),
            mod_len,
        )
        return self.rsa_result


@pytest.fixture(autouse=True)
def _restore_host():
    yield
    reset_host()


@pytest.fixture
def fake_host():
    host = FakeHost()
    with use_host(host):
        yield host


@pytest.fixture
def native_host():
    host = NativeHost()
    with use_host(host):
        yield host
