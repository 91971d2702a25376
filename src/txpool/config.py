"""
Client settings.

Read from the process environment, with ~/.txpool/.env loaded first when it
exists. Values already present in the environment win over the .env file.

- ETH_RPC_URL: JSON-RPC endpoint (default: http://localhost:8545)
- ETH_RPC_TIMEOUT: request timeout in seconds (default: 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

TXPOOL_DIR = Path.home() / ".txpool"
TXPOOL_ENV = TXPOOL_DIR / ".env"

DEFAULT_RPC_URL = "http://localhost:8545"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    rpc_url: str = DEFAULT_RPC_URL
    timeout: float = DEFAULT_TIMEOUT


def parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"ETH_RPC_TIMEOUT must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError(f"ETH_RPC_TIMEOUT must be positive, got {raw!r}")
    return timeout


def load_settings(env_path: Optional[Path] = None) -> Settings:
    """
    Load settings from the environment.

    Args:
        env_path: Path to .env file (default: ~/.txpool/.env)

    Raises:
        ValueError: If ETH_RPC_TIMEOUT is not a positive number
    """
    env_path = env_path or TXPOOL_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)

    rpc_url = os.environ.get("ETH_RPC_URL") or DEFAULT_RPC_URL
    raw_timeout = os.environ.get("ETH_RPC_TIMEOUT")
    timeout = parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    return Settings(rpc_url=rpc_url, timeout=timeout)
