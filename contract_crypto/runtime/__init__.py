"""
contract_crypto.runtime
=======================

Host boundary and call plumbing:

- host        : CryptoHost protocol, active-host slot, host_call()
- native_host : reference host backed by hashlib/pycryptodome/ecdsa/cryptography
- buffer      : BufferView (pointer, length) descriptors
- harness     : execute() for containing fatal aborts
"""

from .buffer import BufferView, SourceKind, buffer_view
from .harness import ExecutionAborted, execute
from .host import (CryptoHost, get_host, host_call, reset_host, set_host,
                   use_host)

__all__ = [
    "BufferView",
    "SourceKind",
    "buffer_view",
    "CryptoHost",
    "get_host",
    "set_host",
    "reset_host",
    "use_host",
    "host_call",
    "execute",
    "ExecutionAborted",
]
