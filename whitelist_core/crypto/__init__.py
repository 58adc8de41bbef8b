"""
Core cryptographic utilities.

Hash primitives and hex helpers used by the Merkle tree.
"""
from .hashing import (
    HASH_PRIMITIVES,
    HashPrimitive,
    Item,
    ensure_bytes,
    from_hex,
    get_hash_primitive,
    hash_item,
    keccak256,
    sha256,
    to_hex,
)

__all__ = [
    "HASH_PRIMITIVES",
    "HashPrimitive",
    "Item",
    "ensure_bytes",
    "from_hex",
    "get_hash_primitive",
    "hash_item",
    "keccak256",
    "sha256",
    "to_hex",
]
