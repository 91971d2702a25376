"""
The ``eth`` namespace client and a factory for HTTP connections.
"""

from __future__ import annotations

from typing import Any, Optional

from ..config import load_settings
from .pool import TransactionPool
from .transport import HttpTransport, Transport


class Eth(TransactionPool):
    """eth_* API client. Currently the transaction pool methods only."""

    def __enter__(self) -> "Eth":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()


def connect(
    url: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[Transport] = None,
) -> Eth:
    """
    Build an Eth client.

    Args:
        url: JSON-RPC endpoint (default: ETH_RPC_URL or http://localhost:8545)
        timeout: Default request timeout in seconds (default: ETH_RPC_TIMEOUT or 30)
        transport: Use this transport instead of creating an HttpTransport

    Returns:
        Eth client; close it (or use it as a context manager) when done
    """
    if transport is not None:
        return Eth(transport)
    if url is None or timeout is None:
        settings = load_settings()
        url = url or settings.rpc_url
        if timeout is None:
            timeout = settings.timeout
    return Eth(HttpTransport(url, timeout=timeout))
