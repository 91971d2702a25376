"""
CLI integration tests using Click's test runner.

The RPC connection is replaced with a stub transport, so no node is needed.
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from txpool.cli import cli
from txpool.rpc.eth import Eth
from txpool.rpc.transport import RpcError

from conftest import BLOCK_HASH, TX_HASH, StubTransport


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _invoke(runner: CliRunner, args: list[str], responses: dict[str, Any]) -> tuple[Any, StubTransport]:
    transport = StubTransport(responses)
    with patch("txpool.cli.connect", return_value=Eth(transport)) as connect:
        result = runner.invoke(cli, ["--rpc-url", "http://node.test:8545", *args])
    if transport.calls:
        connect.assert_called_once_with("http://node.test:8545", None)
    return result, transport


class TestVersionAndHelp:
    """Commands that make no RPC calls."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.3.0" in result.output

    def test_no_command_prints_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "pending" in result.output

    def test_info(self, runner: CliRunner, tmp_path: Any) -> None:
        with patch("txpool.config.TXPOOL_ENV", tmp_path / ".env"):
            result = runner.invoke(cli, ["--rpc-url", "http://node.test:8545", "--timeout", "3", "info"])
        assert result.exit_code == 0
        assert "http://node.test:8545" in result.output
        assert "3s" in result.output

    @pytest.mark.parametrize("flags, level", [([], None), (["--verbose"], "DEBUG")])
    def test_configures_logging(
        self, runner: CliRunner, tmp_path: Any, flags: list[str], level: Any
    ) -> None:
        with patch("txpool.config.TXPOOL_ENV", tmp_path / ".env"), \
                patch("txpool.cli.configure_logging") as configure:
            result = runner.invoke(cli, [*flags, "info"])
        assert result.exit_code == 0
        configure.assert_called_once_with(level)


class TestLookups:
    """Read-only commands."""

    def test_tx(self, runner: CliRunner, mined_tx_json: dict[str, Any]) -> None:
        result, transport = _invoke(runner, ["tx", TX_HASH], {"eth_getTransactionByHash": mined_tx_json})
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == mined_tx_json
        assert transport.calls == [("eth_getTransactionByHash", [TX_HASH], None)]

    def test_tx_unknown_prints_null(self, runner: CliRunner) -> None:
        result, _ = _invoke(runner, ["tx", TX_HASH], {"eth_getTransactionByHash": None})
        assert result.exit_code == 0
        assert json.loads(result.output) is None

    def test_tx_at_hash(self, runner: CliRunner) -> None:
        result, transport = _invoke(
            runner, ["tx-at", BLOCK_HASH, "3"], {"eth_getTransactionByBlockHashAndIndex": None}
        )
        assert result.exit_code == 0, result.output
        assert transport.calls[0][:2] == ("eth_getTransactionByBlockHashAndIndex", [BLOCK_HASH, "0x3"])

    def test_tx_at_number_raw(self, runner: CliRunner) -> None:
        result, transport = _invoke(
            runner,
            ["tx-at", "1000", "0", "--raw"],
            {"eth_getRawTransactionByBlockNumberAndIndex": "0xf86b"},
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == "0xf86b"
        assert transport.calls[0][1] == ["0x3e8", "0x0"]

    def test_block_count_pending_null(self, runner: CliRunner) -> None:
        result, transport = _invoke(
            runner, ["block-count", "pending"], {"eth_getBlockTransactionCountByNumber": None}
        )
        assert result.exit_code == 0
        assert json.loads(result.output) is None
        assert transport.calls[0][1] == ["pending"]

    def test_block_count_by_hash(self, runner: CliRunner) -> None:
        result, _ = _invoke(
            runner, ["block-count", BLOCK_HASH], {"eth_getBlockTransactionCountByHash": "0xa"}
        )
        assert json.loads(result.output) == 10

    def test_nonce(self, runner: CliRunner) -> None:
        address = "0x" + "01" * 20
        result, transport = _invoke(
            runner, ["nonce", address, "--block", "pending"], {"eth_getTransactionCount": "0x2a"}
        )
        assert json.loads(result.output) == 42
        assert transport.calls[0][1] == [address, "pending"]

    def test_receipt(self, runner: CliRunner) -> None:
        receipt = {"status": "0x1", "logs": []}
        result, _ = _invoke(runner, ["receipt", TX_HASH], {"eth_getTransactionReceipt": receipt})
        assert json.loads(result.output) == receipt

    def test_raw(self, runner: CliRunner) -> None:
        result, _ = _invoke(runner, ["raw", TX_HASH], {"eth_getRawTransactionByHash": "0x01"})
        assert json.loads(result.output) == "0x01"

    def test_pending_empty(self, runner: CliRunner) -> None:
        result, _ = _invoke(runner, ["pending"], {"eth_pendingTransactions": []})
        assert result.exit_code == 0
        assert json.loads(result.output) == []

    def test_bad_block_argument(self, runner: CliRunner) -> None:
        result, transport = _invoke(runner, ["block-count", "newest"], {})
        assert result.exit_code == 2
        assert transport.calls == []

    def test_bad_block_hash(self, runner: CliRunner) -> None:
        result, transport = _invoke(runner, ["block-count", "0x" + "zz" * 32], {})
        assert result.exit_code == 2
        assert "invalid block hash" in result.output
        assert transport.calls == []


class TestSendRaw:
    """send-raw command."""

    def test_prints_hash(self, runner: CliRunner) -> None:
        result, transport = _invoke(runner, ["send-raw", "0xf86b"], {"eth_sendRawTransaction": TX_HASH})
        assert result.exit_code == 0
        assert json.loads(result.output) == TX_HASH
        assert transport.calls[0][1] == ["0xf86b"]

    def test_node_error_exits_nonzero(self, runner: CliRunner) -> None:
        result, _ = _invoke(
            runner,
            ["send-raw", "0xf86b"],
            {"eth_sendRawTransaction": RpcError(-32000, "nonce too low")},
        )
        assert result.exit_code == 1
        assert "ERROR" in result.output
        assert "nonce too low" in result.output
