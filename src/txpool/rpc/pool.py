"""
Transaction pool client - typed wrappers for the eth_* transaction methods.

Each method encodes its arguments, makes exactly one call through the
transport and decodes the result. Errors raised by the transport are not
caught here; callers see them unchanged.
"""

from __future__ import annotations

from typing import Any, Optional

from ..models import SignedTransactionResult, TransactionRecord, TransactionSubmission
from ..utils import (
    BlockTag,
    BytesLike,
    DecodeError,
    decode_data,
    decode_hash,
    decode_optional_quantity,
    encode_block_tag,
    encode_data,
    encode_quantity,
    to_address,
    to_bytes,
    to_hash,
)
from .transport import Transport


def _optional_transaction(result: Any) -> Optional[TransactionRecord]:
    if result is None:
        return None
    return TransactionRecord.from_dict(result)


def _raw_bytes(result: Any) -> bytes:
    if result is None:
        return b""
    return decode_data(result)


class TransactionPool:
    """Client for the node's public transaction pool API."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def _call(self, method: str, params: list[Any], timeout: Optional[float]) -> Any:
        return self.transport.call(method, params, timeout=timeout)

    # ============ Block lookups ============

    def get_block_transaction_count_by_number(
        self, block: BlockTag, *, timeout: Optional[float] = None
    ) -> Optional[int]:
        """Return the number of transactions in the given block, or None if not found."""
        result = self._call(
            "eth_getBlockTransactionCountByNumber", [encode_block_tag(block)], timeout
        )
        return decode_optional_quantity(result)

    def get_block_transaction_count_by_hash(
        self, block_hash: BytesLike, *, timeout: Optional[float] = None
    ) -> Optional[int]:
        """Return the number of transactions in the block with the given hash."""
        result = self._call(
            "eth_getBlockTransactionCountByHash", [encode_data(to_hash(block_hash))], timeout
        )
        return decode_optional_quantity(result)

    def get_transaction_by_block_number_and_index(
        self, block: BlockTag, index: int, *, timeout: Optional[float] = None
    ) -> Optional[TransactionRecord]:
        result = self._call(
            "eth_getTransactionByBlockNumberAndIndex",
            [encode_block_tag(block), encode_quantity(index)],
            timeout,
        )
        return _optional_transaction(result)

    def get_transaction_by_block_hash_and_index(
        self, block_hash: BytesLike, index: int, *, timeout: Optional[float] = None
    ) -> Optional[TransactionRecord]:
        result = self._call(
            "eth_getTransactionByBlockHashAndIndex",
            [encode_data(to_hash(block_hash)), encode_quantity(index)],
            timeout,
        )
        return _optional_transaction(result)

    def get_raw_transaction_by_block_number_and_index(
        self, block: BlockTag, index: int, *, timeout: Optional[float] = None
    ) -> bytes:
        """Return the encoded transaction at the given position; empty if missing."""
        result = self._call(
            "eth_getRawTransactionByBlockNumberAndIndex",
            [encode_block_tag(block), encode_quantity(index)],
            timeout,
        )
        return _raw_bytes(result)

    def get_raw_transaction_by_block_hash_and_index(
        self, block_hash: BytesLike, index: int, *, timeout: Optional[float] = None
    ) -> bytes:
        result = self._call(
            "eth_getRawTransactionByBlockHashAndIndex",
            [encode_data(to_hash(block_hash)), encode_quantity(index)],
            timeout,
        )
        return _raw_bytes(result)

    # ============ Accounts and transactions ============

    def get_transaction_count(
        self, address: BytesLike, block: BlockTag = "latest", *, timeout: Optional[float] = None
    ) -> Optional[int]:
        """Return the number of transactions ``address`` has sent as of ``block`` (its nonce)."""
        result = self._call(
            "eth_getTransactionCount",
            [encode_data(to_address(address)), encode_block_tag(block)],
            timeout,
        )
        return decode_optional_quantity(result)

    def get_transaction_by_hash(
        self, tx_hash: BytesLike, *, timeout: Optional[float] = None
    ) -> Optional[TransactionRecord]:
        """Return the transaction with the given hash, or None if the node does not know it."""
        result = self._call("eth_getTransactionByHash", [encode_data(to_hash(tx_hash))], timeout)
        return _optional_transaction(result)

    def get_raw_transaction_by_hash(
        self, tx_hash: BytesLike, *, timeout: Optional[float] = None
    ) -> bytes:
        result = self._call(
            "eth_getRawTransactionByHash", [encode_data(to_hash(tx_hash))], timeout
        )
        return _raw_bytes(result)

    def get_transaction_receipt(
        self, tx_hash: BytesLike, *, timeout: Optional[float] = None
    ) -> Optional[dict[str, Any]]:
        """
        Return the receipt for a transaction.

        The receipt is returned as decoded JSON; its fields are not interpreted.
        None means the transaction is unknown or not yet mined.
        """
        result = self._call(
            "eth_getTransactionReceipt", [encode_data(to_hash(tx_hash))], timeout
        )
        if result is not None and not isinstance(result, dict):
            raise DecodeError(f"Receipt must be a JSON object, got {type(result).__name__}")
        return result

    # ============ Submission and signing ============

    def send_transaction(
        self, args: TransactionSubmission, *, timeout: Optional[float] = None
    ) -> bytes:
        """
        Have the node sign ``args`` with the key for ``args.sender`` and submit it.

        Fails (with the node's error) if that account is locked or unknown to
        the node.

        Returns:
            32-byte transaction hash
        """
        result = self._call("eth_sendTransaction", [args.to_dict()], timeout)
        return decode_hash(result)

    def send_raw_transaction(
        self, encoded_tx: BytesLike, *, timeout: Optional[float] = None
    ) -> bytes:
        """
        Add an already signed transaction to the pool.

        The caller is responsible for the signature and for using the right nonce.

        Returns:
            32-byte transaction hash
        """
        result = self._call("eth_sendRawTransaction", [encode_data(to_bytes(encoded_tx))], timeout)
        return decode_hash(result)

    def sign(
        self, address: BytesLike, data: BytesLike, *, timeout: Optional[float] = None
    ) -> bytes:
        """
        Ask the node to sign ``data`` with the key of ``address``.

        The node signs keccak256("\\x19Ethereum Signed Message:\\n" + len(data) + data);
        the account must be unlocked.

        Returns:
            65-byte signature (r || s || v) as returned by the node
        """
        result = self._call(
            "eth_sign", [encode_data(to_address(address)), encode_data(to_bytes(data))], timeout
        )
        return _raw_bytes(result)

    def sign_transaction(
        self, args: TransactionSubmission, *, timeout: Optional[float] = None
    ) -> Optional[SignedTransactionResult]:
        """Sign ``args`` with the sender's node-held key without submitting it."""
        result = self._call("eth_signTransaction", [args.to_dict()], timeout)
        if result is None:
            return None
        return SignedTransactionResult.from_dict(result)

    def pending_transactions(self, *, timeout: Optional[float] = None) -> list[TransactionRecord]:
        """
        Return pool transactions sent from accounts this node manages.

        Order is whatever the node returns.
        """
        result = self._call("eth_pendingTransactions", [], timeout)
        if result is None:
            return []
        if not isinstance(result, list):
            raise DecodeError(
                f"Pending transactions must be a JSON array, got {type(result).__name__}"
            )
        return [TransactionRecord.from_dict(item) for item in result]

    def resend(
        self,
        args: TransactionSubmission,
        gas_price: int,
        gas_limit: int,
        *,
        timeout: Optional[float] = None,
    ) -> bytes:
        """
        Replace a pooled transaction with a copy using a new gas price and limit.

        The node matches the pooled transaction by sender and nonce.

        Returns:
            32-byte hash of the replacement transaction
        """
        result = self._call(
            "eth_resend",
            [args.to_dict(), encode_quantity(gas_price), encode_quantity(gas_limit)],
            timeout,
        )
        return decode_hash(result)
