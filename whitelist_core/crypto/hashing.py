"""
Hashing Utilities
Hash primitives and hex helpers for Merkle commitments.

This module provides:
- HashPrimitive: the callable shape every digest function satisfies
- SHA-256 and Keccak-256 primitives for raw bytes
- A name registry so configuration can select a primitive
- Lowercase hex encoding/decoding for roots and proof siblings

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Strings are encoded as UTF-8 before hashing, nothing is stripped
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Callable, Union

from eth_utils import keccak

from whitelist_core.schemas.errors import UnknownHashAlgorithmError


# A hash primitive maps an arbitrary byte string to a fixed-length digest.
HashPrimitive = Callable[[bytes], bytes]

Item = Union[bytes, str]


def ensure_bytes(item: Item) -> bytes:
    """
    Normalize a whitelist item to bytes.

    Args:
        item: Raw bytes, or a string which is UTF-8 encoded

    Returns:
        The item as bytes

    Raises:
        TypeError: If the item is neither bytes nor str
    """
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    if isinstance(item, str):
        return item.encode("utf-8")
    raise TypeError(f"Items must be bytes or str, got {type(item).__name__}")


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash of raw bytes (the Ethereum variant, not SHA3-256).

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest
    """
    return keccak(primitive=data)


HASH_PRIMITIVES: dict[str, HashPrimitive] = {
    "sha256": sha256,
    "keccak256": keccak256,
}


def get_hash_primitive(name: str) -> HashPrimitive:
    """
    Look up a registered hash primitive by name.

    Args:
        name: Registered algorithm name (case-insensitive)

    Returns:
        The hash primitive

    Raises:
        UnknownHashAlgorithmError: If no primitive is registered under name
    """
    key = name.strip().lower()
    try:
        return HASH_PRIMITIVES[key]
    except KeyError:
        raise UnknownHashAlgorithmError(
            name, available=sorted(HASH_PRIMITIVES)
        ) from None


def hash_item(item: Item, hash_fn: HashPrimitive = sha256) -> bytes:
    """Hash a single whitelist item into a leaf digest."""
    return hash_fn(ensure_bytes(item))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string without prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        'deadbeef'
    """
    return data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string (optionally 0x-prefixed) to bytes.

    Args:
        hex_string: Hex string, with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If the string has odd length or contains invalid
                   hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    hex_content = hex_string.strip()
    if hex_content[:2].lower() == "0x":
        hex_content = hex_content[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    # bytes.fromhex tolerates embedded whitespace, a digest never has any
    if any(c.isspace() for c in hex_content):
        raise ValueError("Hex string must not contain whitespace")

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HashPrimitive",
    "Item",
    "HASH_PRIMITIVES",
    "ensure_bytes",
    "sha256",
    "keccak256",
    "get_hash_primitive",
    "hash_item",
    "to_hex",
    "from_hex",
]
