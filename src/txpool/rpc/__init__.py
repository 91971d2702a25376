"""
RPC layer: JSON-RPC transport and the typed eth_* transaction pool client.
"""

from .eth import Eth, connect
from .pool import TransactionPool
from .transport import HttpTransport, RpcError, Transport

__all__ = [
    "Eth",
    "HttpTransport",
    "RpcError",
    "TransactionPool",
    "Transport",
    "connect",
]
