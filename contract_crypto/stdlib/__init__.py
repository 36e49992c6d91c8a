"""
contract_crypto.stdlib
======================

Contract-facing crypto surface.

Contracts can do:

    from contract_crypto.stdlib import crypto, rsa

Exports
-------
- crypto : sha256/sha1/sha512/ripemd160, assert_* variants,
           recover_key, assert_recover_key
- rsa    : verify_rsa_sha256_sig, verify_rsa_sha256_sig_raw
"""

from __future__ import annotations

from . import crypto, rsa

__all__ = ("crypto", "rsa")
