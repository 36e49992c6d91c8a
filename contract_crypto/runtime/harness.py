"""
contract_crypto.runtime.harness — run one execution unit and contain fatal aborts.

Contract code never catches `Abort`; it lets it unwind the whole call. The
harness is the one place that turns such an abort into a result envelope:

    execute(fn, *args, **kwargs)
      -> {"ok": True,  "return": <value>}
      -> {"ok": False, "error": {"code": ..., "message": ..., "fatal": True, "context": {...}}}

Recoverable errors (DecodeError, TypeError, ...) are not contained here; they
propagate to the caller unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from contract_crypto.errors import Abort

log = logging.getLogger(__name__)


class ExecutionAborted(Exception):
    """Raised by execute(..., raise_on_abort=True) when the unit aborted."""

    def __init__(self, abort: Abort) -> None:
        super().__init__(f"execution aborted: {abort.code}: {abort.message}")
        self.abort = abort


def execute(
    fn: Callable[..., Any],
    *args: Any,
    raise_on_abort: bool = False,
    **kwargs: Any,
) -> Dict[str, Any]:
    """Run `fn` as a single execution unit."""
    try:
        value = fn(*args, **kwargs)
    except Abort as e:
        log.debug("execution unit %s aborted: %s", getattr(fn, "__name__", fn), e.code)
        if raise_on_abort:
            raise ExecutionAborted(e) from e
        return {"ok": False, "error": e.to_dict()}
    return {"ok": True, "return": value}


__all__ = ["execute", "ExecutionAborted"]
