"""
Common test fixtures: item sets and prebuilt trees.
"""

from whitelist_core.crypto.hashing import HashPrimitive, sha256
from whitelist_core.merkle import MerkleTree


EMAILS = [
    "email1@example.com",
    "email2@example.com",
    "email3@example.com",
]


def make_items(count: int, prefix: str = "leaf") -> list[bytes]:
    """Create count distinct byte items: leaf0, leaf1, ..."""
    return [f"{prefix}{i}".encode() for i in range(count)]


def make_emails(count: int = 3) -> list[str]:
    """Create count whitelisted email addresses."""
    return [f"email{i}@example.com" for i in range(1, count + 1)]


def make_tree(
    count: int = 5,
    hash_fn: HashPrimitive = sha256,
    sort_pairs: bool = False,
) -> MerkleTree:
    """Build a tree over make_items(count)."""
    return MerkleTree.build(make_items(count), hash_fn=hash_fn, sort_pairs=sort_pairs)


def flip_byte(data: bytes, index: int) -> bytes:
    """Return data with one byte XOR-ed with 0x01."""
    mutable = bytearray(data)
    mutable[index] ^= 0x01
    return bytes(mutable)
