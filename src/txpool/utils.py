"""
Wire codec for the Ethereum JSON-RPC value encodings.

Quantities are minimal 0x-prefixed hex integers ("0x0", "0x1bc16d674ec80000").
Data is 0x-prefixed lowercase hex of even length ("0x" is empty bytes).
Addresses and hashes are data values of exactly 20 and 32 bytes.
"""

from __future__ import annotations

import string
from typing import Any, Optional, Union

ADDRESS_LENGTH = 20
HASH_LENGTH = 32

BLOCK_TAGS = ("latest", "earliest", "pending")

BlockTag = Union[int, str]
BytesLike = Union[bytes, bytearray, str]


class TxPoolError(RuntimeError):
    pass


class DecodeError(TxPoolError, ValueError):
    """Raised when a response value does not match the expected shape."""


# ============ Quantities ============


def _is_hex(digits: str) -> bool:
    return all(c in string.hexdigits for c in digits)


def encode_quantity(value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Quantity must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Quantity must be non-negative: {value}")
    return hex(value)


def decode_quantity(value: Any) -> int:
    """Decode a quantity, rejecting anything that is not minimal 0x hex."""
    if not isinstance(value, str):
        raise DecodeError(f"Quantity must be a hex string, got {value!r}")
    if not value.startswith(("0x", "0X")):
        raise DecodeError(f"Quantity missing 0x prefix: {value!r}")
    digits = value[2:]
    if not digits:
        raise DecodeError("Quantity has no digits")
    if len(digits) > 1 and digits[0] == "0":
        raise DecodeError(f"Quantity has leading zero digits: {value!r}")
    if not _is_hex(digits):
        raise DecodeError(f"Invalid quantity: {value!r}")
    return int(digits, 16)


def decode_optional_quantity(value: Any) -> Optional[int]:
    if value is None:
        return None
    return decode_quantity(value)


def encode_optional_quantity(value: Optional[int]) -> Optional[str]:
    if value is None:
        return None
    return encode_quantity(value)


# ============ Data ============


def encode_data(value: bytes) -> str:
    return "0x" + bytes(value).hex()


def decode_data(value: Any, length: Optional[int] = None) -> bytes:
    """
    Decode a 0x-prefixed hex data value.

    Args:
        value: Value taken from a JSON response
        length: Required byte length (20 for addresses, 32 for hashes)

    Raises:
        DecodeError: If the value is not valid hex data of the right length
    """
    if not isinstance(value, str):
        raise DecodeError(f"Data must be a hex string, got {value!r}")
    if not value.startswith(("0x", "0X")):
        raise DecodeError(f"Data missing 0x prefix: {value!r}")
    digits = value[2:]
    if len(digits) % 2:
        raise DecodeError(f"Data has odd number of hex digits: {value!r}")
    if not _is_hex(digits):
        raise DecodeError(f"Invalid hex data: {value!r}")
    raw = bytes.fromhex(digits)
    if length is not None and len(raw) != length:
        raise DecodeError(f"Expected {length} bytes, got {len(raw)}: {value!r}")
    return raw


def decode_optional_data(value: Any, length: Optional[int] = None) -> Optional[bytes]:
    if value is None:
        return None
    return decode_data(value, length)


def encode_optional_data(value: Optional[bytes]) -> Optional[str]:
    if value is None:
        return None
    return encode_data(value)


def decode_address(value: Any) -> bytes:
    return decode_data(value, ADDRESS_LENGTH)


def decode_hash(value: Any) -> bytes:
    return decode_data(value, HASH_LENGTH)


# ============ Argument coercion ============


def to_bytes(value: BytesLike, length: Optional[int] = None) -> bytes:
    """
    Coerce a caller-supplied bytes value or 0x-hex string to bytes.

    Raises:
        ValueError: If the value is not hex or has the wrong length
    """
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    elif isinstance(value, str):
        digits = value[2:] if value.startswith(("0x", "0X")) else value
        if len(digits) % 2 or not _is_hex(digits):
            raise ValueError(f"Invalid hex string: {value!r}")
        raw = bytes.fromhex(digits)
    else:
        raise ValueError(f"Expected bytes or hex string, got {type(value).__name__}")
    if length is not None and len(raw) != length:
        raise ValueError(f"Expected {length} bytes, got {len(raw)}")
    return raw


def to_address(value: BytesLike) -> bytes:
    return to_bytes(value, ADDRESS_LENGTH)


def to_hash(value: BytesLike) -> bytes:
    return to_bytes(value, HASH_LENGTH)


def encode_block_tag(block: BlockTag) -> str:
    """
    Encode a block reference: a block number or one of the symbolic tags.

    A 0x-prefixed string is taken to be an already-encoded block number.
    """
    if isinstance(block, str):
        if block in BLOCK_TAGS:
            return block
        if block.startswith("0x"):
            try:
                return encode_quantity(decode_quantity(block))
            except DecodeError as exc:
                raise ValueError(f"Invalid block number: {block!r}") from exc
        raise ValueError(
            f"Unknown block tag {block!r}; expected a number or one of {', '.join(BLOCK_TAGS)}"
        )
    return encode_quantity(block)
