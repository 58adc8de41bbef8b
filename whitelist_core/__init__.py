"""
Merkle whitelist commitment engine.

Commits to a fixed set of items with a single Merkle root and produces
membership proofs that anyone holding the root can check.
"""

from whitelist_core.crypto import keccak256, sha256
from whitelist_core.merkle import (
    MerkleTree,
    Proof,
    ProofStep,
    Side,
    build_tree,
    generate_proof,
    verify_proof,
)
from whitelist_core.schemas import (
    EmptyInputError,
    MalformedProofError,
    NotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "EmptyInputError",
    "MalformedProofError",
    "MerkleTree",
    "NotFoundError",
    "Proof",
    "ProofStep",
    "Side",
    "build_tree",
    "generate_proof",
    "keccak256",
    "sha256",
    "verify_proof",
]
