__all__ = [
    # Models
    "SignedTransaction",
    "SignedTransactionResult",
    "TransactionRecord",
    "TransactionSubmission",
    # Client
    "Eth",
    "TransactionPool",
    "connect",
    # Transport
    "HttpTransport",
    "Transport",
    # Errors
    "TxPoolError",
    "RpcError",
    "DecodeError",
    # Config
    "Settings",
    "load_settings",
]

from .config import Settings, load_settings
from .models import (
    SignedTransaction,
    SignedTransactionResult,
    TransactionRecord,
    TransactionSubmission,
)
from .rpc.eth import Eth, connect
from .rpc.pool import TransactionPool
from .rpc.transport import HttpTransport, RpcError, Transport
from .utils import DecodeError, TxPoolError
