from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from eth_account import Account

from .utils import (
    DecodeError,
    decode_address,
    decode_data,
    decode_hash,
    decode_optional_data,
    decode_optional_quantity,
    decode_quantity,
    encode_data,
    encode_optional_data,
    encode_optional_quantity,
    encode_quantity,
    to_address,
    to_bytes,
)


def _expect_object(payload: Any, what: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise DecodeError(f"{what} must be a JSON object, got {type(payload).__name__}")
    return payload


def _check_quantity(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative int, got {value!r}")


@dataclass(frozen=True)
class TransactionSubmission:
    """Arguments to submit, sign or resend a transaction through the node.

    ``recipient=None`` creates a contract; the ``to`` key is then left out
    of the request object.
    """

    sender: bytes
    recipient: Optional[bytes]
    gas: int
    gas_price: int
    value: int
    nonce: int
    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "sender", to_address(self.sender))
        if self.recipient is not None:
            object.__setattr__(self, "recipient", to_address(self.recipient))
        object.__setattr__(self, "data", to_bytes(self.data))
        for name in ("gas", "gas_price", "value", "nonce"):
            _check_quantity(name, getattr(self, name))

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "TransactionSubmission":
        payload = _expect_object(payload, "Transaction arguments")
        return cls(
            sender=decode_address(payload.get("from")),
            recipient=decode_optional_data(payload.get("to"), 20),
            gas=decode_quantity(payload.get("gas")),
            gas_price=decode_quantity(payload.get("gasPrice")),
            value=decode_quantity(payload.get("value")),
            nonce=decode_quantity(payload.get("nonce")),
            data=decode_data(payload.get("data", "0x")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"from": encode_data(self.sender)}
        if self.recipient is not None:
            out["to"] = encode_data(self.recipient)
        out["gas"] = encode_quantity(self.gas)
        out["gasPrice"] = encode_quantity(self.gas_price)
        out["value"] = encode_quantity(self.value)
        out["data"] = encode_data(self.data)
        out["nonce"] = encode_quantity(self.nonce)
        return out


@dataclass(frozen=True)
class SignedTransaction:
    """Structured form of a transaction signed by the node."""

    nonce: int
    gas: int
    value: int
    input: bytes
    v: int
    r: int
    s: int
    recipient: Optional[bytes] = None
    gas_price: Optional[int] = None
    hash: Optional[bytes] = None
    type: Optional[int] = None
    chain_id: Optional[int] = None
    max_fee_per_gas: Optional[int] = None
    max_priority_fee_per_gas: Optional[int] = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "SignedTransaction":
        payload = _expect_object(payload, "Signed transaction")
        return cls(
            nonce=decode_quantity(payload.get("nonce")),
            gas=decode_quantity(payload.get("gas")),
            value=decode_quantity(payload.get("value")),
            input=decode_data(payload.get("input")),
            v=decode_quantity(payload.get("v")),
            r=decode_quantity(payload.get("r")),
            s=decode_quantity(payload.get("s")),
            recipient=decode_optional_data(payload.get("to"), 20),
            gas_price=decode_optional_quantity(payload.get("gasPrice")),
            hash=decode_optional_data(payload.get("hash"), 32),
            type=decode_optional_quantity(payload.get("type")),
            chain_id=decode_optional_quantity(payload.get("chainId")),
            max_fee_per_gas=decode_optional_quantity(payload.get("maxFeePerGas")),
            max_priority_fee_per_gas=decode_optional_quantity(
                payload.get("maxPriorityFeePerGas")
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type is not None:
            out["type"] = encode_quantity(self.type)
        if self.chain_id is not None:
            out["chainId"] = encode_quantity(self.chain_id)
        out["nonce"] = encode_quantity(self.nonce)
        out["to"] = encode_optional_data(self.recipient)
        out["gas"] = encode_quantity(self.gas)
        if self.gas_price is not None:
            out["gasPrice"] = encode_quantity(self.gas_price)
        if self.max_priority_fee_per_gas is not None:
            out["maxPriorityFeePerGas"] = encode_quantity(self.max_priority_fee_per_gas)
        if self.max_fee_per_gas is not None:
            out["maxFeePerGas"] = encode_quantity(self.max_fee_per_gas)
        out["value"] = encode_quantity(self.value)
        out["input"] = encode_data(self.input)
        out["v"] = encode_quantity(self.v)
        out["r"] = encode_quantity(self.r)
        out["s"] = encode_quantity(self.s)
        if self.hash is not None:
            out["hash"] = encode_data(self.hash)
        return out


@dataclass(frozen=True)
class SignedTransactionResult:
    raw: bytes
    tx: SignedTransaction

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "SignedTransactionResult":
        payload = _expect_object(payload, "Sign transaction result")
        return cls(
            raw=decode_data(payload.get("raw")),
            tx=SignedTransaction.from_dict(payload.get("tx")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"raw": encode_data(self.raw), "tx": self.tx.to_dict()}

    def recover_sender(self) -> bytes:
        """
        Recover the address that signed ``raw``.

        Returns:
            20-byte sender address
        """
        return to_address(Account.recover_transaction(self.raw))


@dataclass(frozen=True)
class TransactionRecord:
    """A mined or pending transaction as reported by the node.

    ``block_hash``, ``block_number`` and ``transaction_index`` are None while
    the transaction is pending; ``recipient`` is None for contract creation.
    """

    block_hash: Optional[bytes]
    block_number: Optional[int]
    sender: bytes
    gas: int
    gas_price: int
    hash: bytes
    input: bytes
    nonce: int
    recipient: Optional[bytes]
    transaction_index: Optional[int]
    value: int
    v: int
    r: int
    s: int

    @property
    def is_pending(self) -> bool:
        return self.block_hash is None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "TransactionRecord":
        payload = _expect_object(payload, "Transaction")
        return cls(
            block_hash=decode_optional_data(payload.get("blockHash"), 32),
            block_number=decode_optional_quantity(payload.get("blockNumber")),
            sender=decode_address(payload.get("from")),
            gas=decode_quantity(payload.get("gas")),
            gas_price=decode_quantity(payload.get("gasPrice")),
            hash=decode_hash(payload.get("hash")),
            input=decode_data(payload.get("input")),
            nonce=decode_quantity(payload.get("nonce")),
            recipient=decode_optional_data(payload.get("to"), 20),
            transaction_index=decode_optional_quantity(payload.get("transactionIndex")),
            value=decode_quantity(payload.get("value")),
            v=decode_quantity(payload.get("v")),
            r=decode_quantity(payload.get("r")),
            s=decode_quantity(payload.get("s")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "blockHash": encode_optional_data(self.block_hash),
            "blockNumber": encode_optional_quantity(self.block_number),
            "from": encode_data(self.sender),
            "gas": encode_quantity(self.gas),
            "gasPrice": encode_quantity(self.gas_price),
            "hash": encode_data(self.hash),
            "input": encode_data(self.input),
            "nonce": encode_quantity(self.nonce),
            "to": encode_optional_data(self.recipient),
            "transactionIndex": encode_optional_quantity(self.transaction_index),
            "value": encode_quantity(self.value),
            "v": encode_quantity(self.v),
            "r": encode_quantity(self.r),
            "s": encode_quantity(self.s),
        }


__all__ = [
    "SignedTransaction",
    "SignedTransactionResult",
    "TransactionRecord",
    "TransactionSubmission",
]
