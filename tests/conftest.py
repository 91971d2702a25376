"""Shared fixtures: a recording stub transport and canned node responses."""

from __future__ import annotations

from typing import Any, Optional

import pytest
from eth_account import Account

SENDER_KEY = "0x" + "11" * 32
RECIPIENT = "0x" + "22" * 20
BLOCK_HASH = "0x" + "33" * 32
TX_HASH = "0x" + "aa" * 32


class StubTransport:
    """Returns canned results per method and records every call."""

    def __init__(self, responses: Optional[dict[str, Any]] = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, list[Any], Optional[float]]] = []

    def call(self, method: str, params: list[Any], *, timeout: Optional[float] = None) -> Any:
        self.calls.append((method, params, timeout))
        response = self.responses[method]
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture()
def sender() -> Any:
    return Account.from_key(SENDER_KEY)


@pytest.fixture()
def mined_tx_json(sender: Any) -> dict[str, Any]:
    return {
        "blockHash": BLOCK_HASH,
        "blockNumber": "0x10d4f",
        "from": sender.address.lower(),
        "gas": "0x5208",
        "gasPrice": "0x3b9aca00",
        "hash": TX_HASH,
        "input": "0x",
        "nonce": "0x0",
        "to": RECIPIENT,
        "transactionIndex": "0x0",
        "value": "0xde0b6b3a7640000",
        "v": "0x25",
        "r": "0x1b5e176d927f8e9ab405058b2d2457392da3e20f328b16ddabcebc33eaac5fea",
        "s": "0x4ba69724e8f69de52f0125ad8b3c5c2cef33019bac3249e2c0a2192766d1721c",
    }


@pytest.fixture()
def pending_tx_json(mined_tx_json: dict[str, Any]) -> dict[str, Any]:
    payload = dict(mined_tx_json)
    payload.update(blockHash=None, blockNumber=None, transactionIndex=None, nonce="0x1")
    return payload
