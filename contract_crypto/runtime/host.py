"""
contract_crypto.runtime.host — the single boundary into the crypto host.

All actual cryptography (hashing, EC key recovery, RSA verification) happens
in a host object satisfying `CryptoHost`. Buffers cross the boundary as a
memoryview plus an explicit byte length; keys and signatures cross in their
canonical encodings.

The active host lives in a module-level slot (last-wins). By default it is a
lazily constructed `NativeHost` configured from the environment; a node or a
test installs another one with `set_host(...)` or temporarily with
`use_host(...)`.

`host_call(name, *args)` is the only place that calls the host. Fatal aborts
(`Abort` subclasses) and `InvalidInput` propagate unchanged; any other
exception is a host fault and is re-raised as `HostFault`.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Any, Iterator, Optional, Protocol, runtime_checkable

from contract_crypto.errors import Abort, HostFault, InvalidInput

log = logging.getLogger(__name__)

HOST_METHODS = (
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
    "verify_rsa_sha256_sig",
)


@runtime_checkable
class CryptoHost(Protocol):
    """Host crypto interface (one method per boundary call)."""

    # Digests
    def sha256(self, data: memoryview, length: int) -> bytes: ...
    def sha1(self, data: memoryview, length: int) -> bytes: ...
    def sha512(self, data: memoryview, length: int) -> bytes: ...
    def ripemd160(self, data: memoryview, length: int) -> bytes: ...

    # Digest assertions: raise VerificationMismatch on inequality
    def assert_sha256(self, data: memoryview, length: int, digest: bytes) -> None: ...
    def assert_sha1(self, data: memoryview, length: int, digest: bytes) -> None: ...
    def assert_sha512(self, data: memoryview, length: int, digest: bytes) -> None: ...
    def assert_ripemd160(self, data: memoryview, length: int, digest: bytes) -> None: ...

    # Key recovery over canonical encodings
    def recover_key(self, digest: bytes, sig: bytes) -> bytes: ...
    def assert_recover_key(self, digest: bytes, sig: bytes, pubkey: bytes) -> None: ...

    # RSA-PKCS#1 v1.5 with SHA-256; hex parameters as raw text bytes
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
    ) -> bool: ...


_host: Optional[CryptoHost] = None


def _default_host() -> CryptoHost:
    from contract_crypto.config import load_config
    from contract_crypto.runtime.native_host import NativeHost

    return NativeHost.from_config(load_config())


def set_host(host: CryptoHost) -> None:
    """
    Install the active host. Safe to call multiple times (last-wins).
    Duck-typed hosts are accepted as long as every boundary method exists.
    """
    global _host
    missing = [m for m in HOST_METHODS if not callable(getattr(host, m, None))]
    if missing:
        raise TypeError(f"host missing methods: {', '.join(missing)}")
    log.debug("installing crypto host %s", type(host).__name__)
    _host = host


def get_host() -> CryptoHost:
    global _host
    if _host is None:
        _host = _default_host()
    return _host


def reset_host() -> None:
    """Drop the active host; the next get_host() rebuilds the default."""
    global _host
    _host = None


@contextlib.contextmanager
def use_host(host: CryptoHost) -> Iterator[CryptoHost]:
    """Temporarily install `host`, restoring the previous one on exit."""
    global _host
    previous = _host
    set_host(host)
    try:
        yield host
    finally:
        _host = previous


def host_call(name: str, *args: Any) -> Any:
    """Perform exactly one call into the active host."""
    host = get_host()
    fn = getattr(host, name)
    try:
        return fn(*args)
    except (Abort, InvalidInput):
        raise
    except Exception as e:
        log.warning("crypto host %s.%s failed: %s", type(host).__name__, name, e)
        raise HostFault(
            f"host call {name} failed: {e}",
            context={"call": name, "host": type(host).__name__, "cause": type(e).__name__},
        ) from e


__all__ = [
    "CryptoHost",
    "HOST_METHODS",
    "set_host",
    "get_host",
    "reset_host",
    "use_host",
    "host_call",
]
