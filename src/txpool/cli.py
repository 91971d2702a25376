"""
txpool CLI

Command-line access to a node's transaction pool API.

Commands:
  tx          - Show a transaction by hash
  tx-at       - Show a transaction by block and index
  raw         - Show raw transaction bytes by hash
  receipt     - Show a transaction receipt
  block-count - Count transactions in a block
  nonce       - Show an account's transaction count
  pending     - List pending transactions of node-managed accounts
  send-raw    - Submit a signed raw transaction
  info        - Show connection settings
"""

from __future__ import annotations

import json
import sys
from typing import Any, Callable, Optional, Union

import click
import httpx

from .config import load_settings
from .log import configure_logging
from .rpc.eth import Eth, connect
from .utils import BLOCK_TAGS, HASH_LENGTH, TxPoolError, encode_data, to_bytes

VERSION = "0.3.0"


def _print_banner() -> None:
    click.echo(
        click.style("  ◆ ", fg="cyan")
        + click.style("T X P O O L", fg="bright_white", bold=True)
        + click.style(f"  v{VERSION}", dim=True)
    )
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="txpool")
@click.option("--rpc-url", envvar="ETH_RPC_URL", default=None, help="JSON-RPC endpoint URL")
@click.option(
    "--timeout",
    envvar="ETH_RPC_TIMEOUT",
    type=float,
    default=None,
    help="Request timeout in seconds",
)
@click.option("--verbose", "-v", is_flag=True, help="Log RPC requests to stderr")
@click.pass_context
def cli(ctx: click.Context, rpc_url: Optional[str], timeout: Optional[float], verbose: bool) -> None:
    """txpool - Ethereum transaction pool client."""
    configure_logging("DEBUG" if verbose else None)
    ctx.obj = {"rpc_url": rpc_url, "timeout": timeout}
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Helper Functions ============


def _run(ctx: click.Context, action: Callable[[Eth], Any]) -> None:
    """Connect, run one call and print its result as JSON."""
    try:
        with connect(ctx.obj["rpc_url"], ctx.obj["timeout"]) as eth:
            result = action(eth)
    except (TxPoolError, ValueError, httpx.HTTPError) as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)
    click.echo(json.dumps(_to_json(result), indent=2))


def _to_json(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, bytes):
        return encode_data(value)
    if isinstance(value, list):
        return [_to_json(item) for item in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


def _parse_block(value: str) -> Union[int, str, bytes]:
    """Parse a block argument: tag, decimal or 0x number, or 32-byte hash."""
    if value in BLOCK_TAGS:
        return value
    if value.startswith("0x"):
        if len(value) == 2 + 2 * HASH_LENGTH:
            try:
                return to_bytes(value, HASH_LENGTH)
            except ValueError as exc:
                raise click.BadParameter(f"invalid block hash {value!r}") from exc
        return value
    if value.isdigit():
        return int(value)
    raise click.BadParameter(
        f"expected a block number, block hash or one of {', '.join(BLOCK_TAGS)}"
    )


# ============ Lookups ============


@cli.command()
@click.argument("tx_hash")
@click.pass_context
def tx(ctx: click.Context, tx_hash: str) -> None:
    """Show a transaction by hash."""
    _run(ctx, lambda eth: eth.get_transaction_by_hash(tx_hash))


@cli.command("tx-at")
@click.argument("block")
@click.argument("index", type=int)
@click.option("--raw", is_flag=True, help="Show the encoded transaction instead")
@click.pass_context
def tx_at(ctx: click.Context, block: str, index: int, raw: bool) -> None:
    """Show the transaction at INDEX in BLOCK (number, tag or hash)."""
    ref = _parse_block(block)
    if isinstance(ref, bytes):
        if raw:
            _run(ctx, lambda eth: eth.get_raw_transaction_by_block_hash_and_index(ref, index))
        else:
            _run(ctx, lambda eth: eth.get_transaction_by_block_hash_and_index(ref, index))
    elif raw:
        _run(ctx, lambda eth: eth.get_raw_transaction_by_block_number_and_index(ref, index))
    else:
        _run(ctx, lambda eth: eth.get_transaction_by_block_number_and_index(ref, index))


@cli.command()
@click.argument("tx_hash")
@click.pass_context
def raw(ctx: click.Context, tx_hash: str) -> None:
    """Show the raw encoded transaction for a hash."""
    _run(ctx, lambda eth: eth.get_raw_transaction_by_hash(tx_hash))


@cli.command()
@click.argument("tx_hash")
@click.pass_context
def receipt(ctx: click.Context, tx_hash: str) -> None:
    """Show a transaction receipt."""
    _run(ctx, lambda eth: eth.get_transaction_receipt(tx_hash))


@cli.command("block-count")
@click.argument("block")
@click.pass_context
def block_count(ctx: click.Context, block: str) -> None:
    """Count the transactions in BLOCK (number, tag or hash)."""
    ref = _parse_block(block)
    if isinstance(ref, bytes):
        _run(ctx, lambda eth: eth.get_block_transaction_count_by_hash(ref))
    else:
        _run(ctx, lambda eth: eth.get_block_transaction_count_by_number(ref))


@cli.command()
@click.argument("address")
@click.option("--block", default="latest", show_default=True, help="Block number or tag")
@click.pass_context
def nonce(ctx: click.Context, address: str, block: str) -> None:
    """Show the number of transactions sent from ADDRESS."""
    ref = _parse_block(block)
    if isinstance(ref, bytes):
        raise click.BadParameter("block hashes are not accepted here", param_hint="--block")
    _run(ctx, lambda eth: eth.get_transaction_count(address, ref))


@cli.command()
@click.pass_context
def pending(ctx: click.Context) -> None:
    """List pending transactions sent from node-managed accounts."""
    _run(ctx, lambda eth: eth.pending_transactions())


# ============ Submission ============


@cli.command("send-raw")
@click.argument("encoded_tx")
@click.pass_context
def send_raw(ctx: click.Context, encoded_tx: str) -> None:
    """Submit a signed, hex-encoded transaction."""
    _run(ctx, lambda eth: eth.send_raw_transaction(encoded_tx))


# ============ Info ============


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show connection settings."""
    _print_banner()
    try:
        settings = load_settings()
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)
    rpc_url = ctx.obj["rpc_url"] or settings.rpc_url
    timeout = ctx.obj["timeout"] if ctx.obj["timeout"] is not None else settings.timeout
    click.echo(click.style("  RPC URL: ", dim=True) + click.style(rpc_url, fg="bright_white"))
    click.echo(click.style("  Timeout: ", dim=True) + click.style(f"{timeout:g}s", fg="bright_white"))


# ============ Entry Points ============


def main() -> None:
    """txpool CLI entry point."""
    # Ensure UTF-8 output on Windows (for the banner symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    cli()


if __name__ == "__main__":
    main()
