"""
contract_crypto — canonical key/signature encodings and host-backed crypto
helpers for smart contracts.

Public surface:

- Types: Checksum160/256/512, CurveType, PublicKey, Signature
- Digests: sha256, sha1, sha512, ripemd160 (+ assert_* variants)
- Recovery: recover_key, assert_recover_key
- RSA: verify_rsa_sha256_sig, verify_rsa_sha256_sig_raw
- Host plumbing: set_host, get_host, use_host, BufferView, execute

The cryptography itself runs in the active host (see contract_crypto.runtime.host);
by default that is the in-process NativeHost.
"""

from __future__ import annotations

from .errors import (Abort, CryptoError, DecodeError, HostFault, InvalidInput,
                     RecoveryError, VerificationMismatch)
from .runtime import (BufferView, execute, get_host, set_host, use_host)
from .stdlib.crypto import (assert_recover_key, assert_ripemd160, assert_sha1,
                            assert_sha256, assert_sha512, recover_key,
                            ripemd160, sha1, sha256, sha512)
from .stdlib.rsa import verify_rsa_sha256_sig, verify_rsa_sha256_sig_raw
from .types import (Checksum160, Checksum256, Checksum512, CurveType,
                    PublicKey, Signature)
from .version import __version__


def version() -> str:
    """Return the contract_crypto semantic version string."""
    return __version__


__all__ = [
    "__version__",
    "version",
    "Checksum160",
    "Checksum256",
    "Checksum512",
    "CurveType",
    "PublicKey",
    "Signature",
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
    "verify_rsa_sha256_sig_raw",
    "BufferView",
    "execute",
    "get_host",
    "set_host",
    "use_host",
    "CryptoError",
    "DecodeError",
    "InvalidInput",
    "Abort",
    "VerificationMismatch",
    "RecoveryError",
    "HostFault",
]
