"""
Merkle Tree and Membership Proofs
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: Immutable tree built from a sequence of items
- Proof / ProofStep / Side: Plain-data membership proofs
- build_tree / generate_proof / verify_proof: Functional entry points
- MerkleProver / MerkleVerifier: Convenience wrappers

Commitment Rules:
1. Leaf hashing: H(item)
2. Parent hashing: H(left + right), pair sorted byte-wise with sort_pairs
3. Padding: Duplicate last node if odd number at any level
4. Empty input: EmptyInputError
5. Single leaf: root = leaf

Usage:
    from whitelist_core.merkle import build_tree, verify_proof
    from whitelist_core.crypto import keccak256

    tree = build_tree(emails, hash_fn=keccak256, sort_pairs=True)
    root = tree.root()

    # Generate a proof for one member
    proof = tree.proof("email2@example.com")

    # Anyone holding only the root can verify it
    assert verify_proof("email2@example.com", proof, root,
                        hash_fn=keccak256, sort_pairs=True)
"""
from .merkle_tree import (
    MerkleTree,
    Proof,
    ProofStep,
    Side,
    build_tree,
    combine,
    compute_tree_height,
    generate_proof,
    verify_proof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleTree",
    "Proof",
    "ProofStep",
    "Side",
    # Core functions
    "build_tree",
    "combine",
    "compute_tree_height",
    "generate_proof",
    "verify_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
