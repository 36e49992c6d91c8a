from __future__ import annotations

import array

import pytest

from contract_crypto.errors import DecodeError, HostFault, VerificationMismatch
from contract_crypto.runtime.buffer import BufferView
from contract_crypto.runtime.native_host import NativeHost
from contract_crypto.runtime.host import use_host
from contract_crypto.stdlib import crypto
from contract_crypto.types.checksum import (Checksum160, Checksum256,
                                            Checksum512)

HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
ABC_SHA1 = "a9993e364706816aba3e25717850c26c9cd0d89d"
ABC_SHA512 = (
    "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
    "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f"
)
EMPTY_RIPEMD160 = "9c1185a5c5e9fc54612808977ee8f548b2258d31"


def _flip_bit(c, bit: int = 0):
    raw = bytearray(bytes(c))
    raw[bit // 8] ^= 1 << (bit % 8)
    return type(c)(bytes(raw))


def test_sha256_hello_vector(native_host) -> None:
    digest = crypto.sha256(b"hello")
    assert isinstance(digest, Checksum256)
    assert digest.hex() == HELLO_SHA256


def test_known_vectors(native_host) -> None:
    assert crypto.sha1(b"abc") == Checksum160.from_hex(ABC_SHA1)
    assert crypto.sha512(b"abc") == Checksum512.from_hex(ABC_SHA512)
    assert crypto.ripemd160(b"") == Checksum160.from_hex(EMPTY_RIPEMD160)


def test_sha256_is_deterministic(native_host) -> None:
    data = bytes(range(256)) * 3
    assert crypto.sha256(data) == crypto.sha256(bytearray(data))


def test_text_and_bytes_hash_identically(native_host) -> None:
    assert crypto.sha256("hello") == crypto.sha256(b"hello")
    assert crypto.sha256(BufferView.from_raw(b"hello world", 5)) == crypto.sha256(b"hello")


def test_assert_sha256_hello_passes_and_mutation_aborts(native_host) -> None:
    expected = Checksum256.from_hex(HELLO_SHA256)
    crypto.assert_sha256(b"hello", expected)
    with pytest.raises(VerificationMismatch):
        crypto.assert_sha256(b"hello", _flip_bit(expected, 255))


@pytest.mark.parametrize(
    "digest_fn, assert_fn",
    [
        (crypto.sha256, crypto.assert_sha256),
        (crypto.sha1, crypto.assert_sha1),
        (crypto.sha512, crypto.assert_sha512),
        (crypto.ripemd160, crypto.assert_ripemd160),
    ],
)
@pytest.mark.parametrize("bit", [0, 7, 100])
def test_assert_matches_own_digest(native_host, digest_fn, assert_fn, bit: int) -> None:
    data = b"the quick brown fox"
    good = digest_fn(data)
    assert_fn(data, good)
    with pytest.raises(VerificationMismatch):
        assert_fn(data, _flip_bit(good, bit % (len(good) * 8)))


def test_assert_accepts_raw_bytes_expected(native_host) -> None:
    crypto.assert_sha256(b"hello", bytes.fromhex(HELLO_SHA256))


def test_wrong_width_expected_is_rejected_before_host_call(fake_host) -> None:
    with pytest.raises(DecodeError):
        crypto.assert_sha256(b"hello", bytes(20))
    with pytest.raises(TypeError):
        crypto.assert_sha256(b"hello", Checksum160(bytes(20)))
    assert fake_host.calls == []


def test_multi_byte_elements_hash_raw_bytes(native_host) -> None:
    words = array.array("I", [1, 2, 3])
    assert crypto.sha256(words) == crypto.sha256(words.tobytes())


def test_fast_eval_elides_assertions() -> None:
    with use_host(NativeHost(fast_eval=True)):
        crypto.assert_sha256(b"hello", Checksum256.zero())
        crypto.assert_ripemd160(b"hello", Checksum160.zero())
        # plain digests are still computed
        assert crypto.sha256(b"hello").hex() == HELLO_SHA256


def test_oversized_input_is_a_host_fault() -> None:
    with use_host(NativeHost(max_input_bytes=1024)):
        with pytest.raises(HostFault):
            crypto.sha256(bytes(2048))
