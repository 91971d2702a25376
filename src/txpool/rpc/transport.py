"""
JSON-RPC 2.0 transport.

The transaction-pool client only needs one capability from its transport:
invoke a named method with positional params and hand back the ``result``
member of the response. ``HttpTransport`` provides that over HTTP with httpx.
"""

from __future__ import annotations

import itertools
from typing import Any, Optional, Protocol

import httpx

from ..log import get_logger
from ..utils import DecodeError, TxPoolError

logger = get_logger(__name__)


class RpcError(TxPoolError):
    """JSON-RPC error object returned by the node."""

    def __init__(self, code: Optional[int], message: str, data: Any = None):
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data


class Transport(Protocol):
    def call(self, method: str, params: list[Any], *, timeout: Optional[float] = None) -> Any:
        ...


class HttpTransport:
    """
    JSON-RPC over HTTP POST.

    Holds one httpx.Client for connection reuse. Pass ``client`` to supply a
    preconfigured one (e.g. with an ``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.url = url
        self._client = client or httpx.Client(timeout=timeout)
        self._ids = itertools.count(1)

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def call(self, method: str, params: list[Any], *, timeout: Optional[float] = None) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_getTransactionByHash")
            params: Positional RPC parameters, already wire-encoded
            timeout: Per-request timeout in seconds; None keeps the client default

        Returns:
            Result field from the RPC response (may be None)

        Raises:
            RpcError: If the node answers with a JSON-RPC error object
            DecodeError: If the body is not a JSON-RPC response
            httpx.HTTPError: On network failure or non-2xx status
        """
        request_id = next(self._ids)
        payload = {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": method,
            "params": params,
        }
        logger.debug("rpc_request", method=method, id=request_id)

        if timeout is None:
            response = self._client.post(self.url, json=payload)
        else:
            response = self._client.post(self.url, json=payload, timeout=timeout)
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as exc:
            raise DecodeError(f"Response to {method} is not valid JSON") from exc

        if not isinstance(data, dict) or ("result" not in data and "error" not in data):
            raise DecodeError(f"Response to {method} is not a JSON-RPC response: {data!r}")

        error = data.get("error")
        if error is not None:
            if not isinstance(error, dict):
                raise DecodeError(f"Malformed error object in response to {method}: {error!r}")
            code = error.get("code")
            message = str(error.get("message", ""))
            logger.debug("rpc_error", method=method, code=code, message=message)
            raise RpcError(code, message, error.get("data"))

        return data.get("result")


__all__ = ["HttpTransport", "RpcError", "Transport"]
