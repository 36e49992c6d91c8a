"""
contract_crypto.config — feature flags and numeric caps for the crypto layer.

This module has NO third-party deps and is safe to import very early.

Configuration precedence:
  1) Environment variables (CONTRACT_CRYPTO_* / legacy CC_*)
  2) Hardcoded safe defaults below

Key env vars (case-insensitive where boolean):
  - CONTRACT_CRYPTO_FAST_EVAL        (bool)  default: false
  - CONTRACT_CRYPTO_MAX_INPUT_BYTES  (int)   default: 1_048_576  (1 MiB)
  - CONTRACT_CRYPTO_STRICT_VARINT    (bool)  default: true

Usage:
    from contract_crypto.config import load_config
    CFG = load_config()
    if CFG.fast_eval: ...
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

_PREFIX = "CONTRACT_CRYPTO_"
_LEGACY_PREFIX = "CC_"


def _raw(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None:
        raw = os.getenv(name.replace(_PREFIX, _LEGACY_PREFIX, 1))
    return raw


def _env_bool(name: str, default: bool) -> bool:
    raw = _raw(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "t", "yes", "y", "on")


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = _raw(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


@dataclass(frozen=True)
class CryptoConfig:
    # Reference host elides assert_* calls entirely
    fast_eval: bool

    # Largest payload the reference host hashes or verifies
    max_input_bytes: int

    # Reject non-minimal LEB128 encodings on decode
    strict_varint: bool

    def as_dict(self) -> Dict[str, Any]:
        return {
            "fast_eval": self.fast_eval,
            "max_input_bytes": self.max_input_bytes,
            "strict_varint": self.strict_varint,
        }


@lru_cache(maxsize=1)
def load_config() -> CryptoConfig:
    """
    Build and cache a CryptoConfig from environment + safe defaults.
    Call `load_config.cache_clear()` after changing the environment.
    """
    return CryptoConfig(
        fast_eval=_env_bool(_PREFIX + "FAST_EVAL", False),
        max_input_bytes=_env_int(
            _PREFIX + "MAX_INPUT_BYTES", 1 << 20, min_v=1 << 10, max_v=64 << 20
        ),
        strict_varint=_env_bool(_PREFIX + "STRICT_VARINT", True),
    )


__all__ = ["CryptoConfig", "load_config"]
