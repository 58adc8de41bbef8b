"""
Merkle Proofs Convenience Wrappers
Thin wrappers around the Merkle tree functions for callers that only
hold items, or only hold hex-rendered proof data.

This module provides class-based interfaces:
- MerkleProver: Build a tree and generate proofs in one call
- MerkleVerifier: Verify proofs from Proof objects or hex components
"""
from __future__ import annotations

from typing import Sequence

from whitelist_core.crypto.hashing import HashPrimitive, Item, from_hex, sha256
from whitelist_core.merkle.merkle_tree import (
    MerkleTree,
    Proof,
    ProofStep,
    Side,
    verify_proof,
)
from whitelist_core.schemas.errors import MalformedProofError


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], b"b", sort_pairs=True)
        >>> len(proof)
        2
    """

    @staticmethod
    def prove(
        items: Sequence[Item],
        item: Item,
        hash_fn: HashPrimitive = sha256,
        sort_pairs: bool = False,
    ) -> Proof:
        """
        Build a tree from items and generate a proof for item.

        Raises:
            EmptyInputError: If items is empty
            NotFoundError: If item is not in items
        """
        tree = MerkleTree.build(items, hash_fn=hash_fn, sort_pairs=sort_pairs)
        return tree.proof(item)

    @staticmethod
    def compute_root(
        items: Sequence[Item],
        hash_fn: HashPrimitive = sha256,
        sort_pairs: bool = False,
    ) -> bytes:
        """
        Compute the Merkle root for a sequence of items.

        Raises:
            EmptyInputError: If items is empty
        """
        return MerkleTree.build(items, hash_fn=hash_fn, sort_pairs=sort_pairs).root()


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(items, b"b")
        >>> MerkleVerifier.verify(b"b", proof, root)
        True
    """

    @staticmethod
    def verify(
        item: Item,
        proof: Proof,
        root: bytes,
        hash_fn: HashPrimitive = sha256,
        sort_pairs: bool = False,
    ) -> bool:
        """
        Verify a Merkle proof.

        Returns:
            True if the proof is valid, False otherwise
        """
        return verify_proof(item, proof, root, hash_fn=hash_fn, sort_pairs=sort_pairs)

    @staticmethod
    def verify_hex(
        item: Item,
        siblings: Sequence[str],
        root: str,
        sides: Sequence[str | None] | None = None,
        hash_fn: HashPrimitive = sha256,
        sort_pairs: bool = False,
    ) -> bool:
        """
        Verify an item against hex-rendered proof components.

        This is the shape a party holding only the published root and a
        printed proof has to work with.

        Args:
            item: The claimed member
            siblings: Sibling digests as hex, bottom-up
            root: Root digest as hex
            sides: Side per sibling ("left"/"right"); needed unless sort_pairs
            hash_fn: Hash primitive the tree was built with
            sort_pairs: Pairing policy the tree was built with

        Returns:
            True if the proof is valid, False otherwise

        Raises:
            MalformedProofError: If hex is invalid or sides do not line up
                                 with siblings
        """
        if sides is not None and len(sides) != len(siblings):
            raise MalformedProofError(
                f"Got {len(sides)} sides for {len(siblings)} siblings"
            )

        steps: list[ProofStep] = []
        for i, sibling_hex in enumerate(siblings):
            try:
                sibling = from_hex(sibling_hex)
            except ValueError as e:
                raise MalformedProofError(str(e), step_index=i) from e
            side = sides[i] if sides is not None else None
            if side is not None:
                try:
                    side = Side(side)
                except ValueError:
                    raise MalformedProofError(
                        f"Unknown side indicator: {side!r}", step_index=i
                    ) from None
            steps.append(ProofStep(sibling=sibling, side=side))

        try:
            root_bytes = from_hex(root)
        except ValueError as e:
            raise MalformedProofError(f"Invalid root: {e}") from e

        return verify_proof(
            item,
            Proof(steps=tuple(steps)),
            root_bytes,
            hash_fn=hash_fn,
            sort_pairs=sort_pairs,
        )


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
