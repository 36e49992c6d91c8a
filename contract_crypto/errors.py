"""
contract_crypto.errors — structured error types for the crypto layer.

Hierarchy
---------
CryptoError
 ├─ DecodeError          : malformed/truncated canonical bytes (recoverable)
 ├─ InvalidInput         : malformed host input such as bad hex text (recoverable)
 └─ Abort                : fatal; terminates the calling execution unit
     ├─ VerificationMismatch : digest or recovered-key assertion failed
     ├─ RecoveryError        : signature could not be recovered to a key
     └─ HostFault            : the host boundary call itself failed

`Abort` and its subclasses are a separate channel from the recoverable errors:
contract code is expected to let them propagate, and the execution harness
(contract_crypto.runtime.harness) turns them into a failed result envelope.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class CryptoError(Exception):
    """
    Base error with a short machine-readable code and optional context.

        CryptoError("simple message")
        CryptoError("message", code="some_code", context={...})
    """

    code: str = "crypto_error"

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__
        if code is not None:
            self.code = str(code)
        self.context: Dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        return self.message

    @property
    def fatal(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "fatal": self.fatal,
            "context": dict(self.context),
        }


class DecodeError(CryptoError):
    """Canonical bytes are truncated, over-long or otherwise malformed."""

    code = "decode_error"


class InvalidInput(CryptoError):
    """Host-side rejection of malformed input (e.g. non-hex RSA parameters)."""

    code = "invalid_input"


class Abort(CryptoError):
    """Non-recoverable failure: the whole execution unit must stop."""

    code = "abort"

    @property
    def fatal(self) -> bool:
        return True


class VerificationMismatch(Abort):
    """A digest or recovered key did not equal the expected value."""

    code = "verification_mismatch"


class RecoveryError(Abort):
    """Public-key recovery was impossible for the given digest/signature."""

    code = "recover_failed"


class HostFault(Abort):
    """The host boundary call raised or returned something unusable."""

    code = "host_fault"


__all__ = [
    "CryptoError",
    "DecodeError",
    "InvalidInput",
    "Abort",
    "VerificationMismatch",
    "RecoveryError",
    "HostFault",
]
