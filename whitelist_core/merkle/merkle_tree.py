"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification.

This module provides:
- MerkleTree: an immutable tree built once from a sequence of items
- Membership proof generation for any item (or leaf index)
- Stateless proof verification against a root
- Standard padding rule for odd number of nodes

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = H(item), str items are UTF-8 encoded first
2. Parent hashing: parent = H(left + right)
   - with sort_pairs, the smaller digest (byte-wise) goes on the left
3. Padding rule: Duplicate last node if odd number at any level
4. Empty input: construction raises EmptyInputError
5. Single leaf: root = leaf, proof is empty

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf order is the input order; leaves are never sorted or deduplicated
- H is supplied by the caller; swapping it changes every root and proof
"""
from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Sequence

from whitelist_core.crypto.hashing import (
    HashPrimitive,
    Item,
    hash_item,
    sha256,
    to_hex,
)
from whitelist_core.schemas.errors import (
    EmptyInputError,
    MalformedProofError,
    NotFoundError,
)


logger = logging.getLogger(__name__)


class Side(str, Enum):
    """Which operand a proof sibling is when recombining with the current node."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ProofStep:
    """
    One level of a Merkle proof.

    Attributes:
        sibling: The sibling digest at this level
        side: Position of the sibling in the concatenation. None for
              sorted-pairs proofs, where the verifier re-sorts each pair.
    """
    sibling: bytes
    side: Side | None = None


@dataclass(frozen=True)
class Proof:
    """
    A Merkle membership proof, leaf-adjacent step first.

    Plain data: holds no reference to the tree it came from.
    """
    steps: tuple[ProofStep, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[ProofStep]:
        return iter(self.steps)

    @property
    def siblings(self) -> list[bytes]:
        """Sibling digests, bottom to top."""
        return [step.sibling for step in self.steps]

    def to_hex(self) -> list[str]:
        """Sibling digests rendered as lowercase hex."""
        return [to_hex(step.sibling) for step in self.steps]


def combine(
    left: bytes,
    right: bytes,
    hash_fn: HashPrimitive = sha256,
    sort_pairs: bool = False,
) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Args:
        left: Left child digest
        right: Right child digest
        hash_fn: Hash primitive
        sort_pairs: Order the pair byte-wise before concatenating

    Returns:
        Parent digest: H(left + right), or H(min + max) with sort_pairs
    """
    if sort_pairs and right < left:
        left, right = right, left
    return hash_fn(left + right)


def compute_tree_height(leaf_count: int) -> int:
    """
    Compute the number of proof steps for a tree with leaf_count leaves.

    Equals ceil(log2(leaf_count)): duplicate-last padding never adds a level.

    Raises:
        ValueError: If leaf_count is less than 1
    """
    if leaf_count < 1:
        raise ValueError(f"Leaf count must be at least 1, got {leaf_count}")
    return (leaf_count - 1).bit_length()


class MerkleTree:
    """
    Immutable binary Merkle tree over a fixed sequence of items.

    Build with MerkleTree.build(); any change to the item set needs a
    full rebuild. A built tree may be shared read-only across threads.

    Example:
        >>> tree = MerkleTree.build([b"a", b"b", b"c"], sort_pairs=True)
        >>> proof = tree.proof(b"b")
        >>> tree.verify(b"b", proof)
        True
    """

    def __init__(
        self,
        layers: Sequence[Sequence[bytes]],
        hash_fn: HashPrimitive,
        sort_pairs: bool,
        leaf_count: int,
    ) -> None:
        self._layers: tuple[tuple[bytes, ...], ...] = tuple(
            tuple(layer) for layer in layers
        )
        self._hash_fn = hash_fn
        self._sort_pairs = sort_pairs
        self._leaf_count = leaf_count

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    @classmethod
    def build(
        cls,
        items: Iterable[Item],
        hash_fn: HashPrimitive = sha256,
        sort_pairs: bool = False,
    ) -> MerkleTree:
        """
        Build a tree from a sequence of items.

        Algorithm:
        1. Hash every item into a leaf (duplicates are kept)
        2. Until a single digest remains:
           - If odd number of nodes, duplicate the last node
           - Pair adjacent nodes and compute parent hashes

        Example: [a, b, c] -> [a, b, c, c] -> [H(a,b), H(c,c)] -> [root]

        Args:
            items: Non-empty sequence of bytes or str items
            hash_fn: Hash primitive used for leaves and parents
            sort_pairs: Order each pair byte-wise before hashing

        Returns:
            The built MerkleTree

        Raises:
            EmptyInputError: If items is empty
        """
        items = list(items)
        if not items:
            raise EmptyInputError()

        current: list[bytes] = [hash_item(item, hash_fn) for item in items]
        layers: list[tuple[bytes, ...]] = []

        while len(current) > 1:
            if len(current) % 2 == 1:
                current.append(current[-1])
            layers.append(tuple(current))
            current = [
                combine(current[i], current[i + 1], hash_fn, sort_pairs)
                for i in range(0, len(current), 2)
            ]
        layers.append(tuple(current))

        tree = cls(
            layers=layers,
            hash_fn=hash_fn,
            sort_pairs=sort_pairs,
            leaf_count=len(items),
        )
        logger.debug(
            f"Built Merkle tree: {tree.leaf_count} leaves, height {tree.height}, "
            f"sort_pairs={sort_pairs}, root {tree.root_hex()}"
        )
        return tree

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def hash_fn(self) -> HashPrimitive:
        return self._hash_fn

    @property
    def sort_pairs(self) -> bool:
        return self._sort_pairs

    @property
    def leaf_count(self) -> int:
        """Number of input items (padding excluded)."""
        return self._leaf_count

    @property
    def layers(self) -> tuple[tuple[bytes, ...], ...]:
        """All layers, leaves first. Non-root layers include padding."""
        return self._layers

    @property
    def leaves(self) -> tuple[bytes, ...]:
        """Leaf digests in input order, padding excluded."""
        return self._layers[0][: self._leaf_count]

    @property
    def height(self) -> int:
        """Number of layers above the leaves (= proof length)."""
        return len(self._layers) - 1

    def root(self) -> bytes:
        """Return the root digest."""
        return self._layers[-1][0]

    def root_hex(self) -> str:
        """Return the root digest as lowercase hex."""
        return to_hex(self.root())

    def __len__(self) -> int:
        return self._leaf_count

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={self._leaf_count}, height={self.height}, "
            f"sort_pairs={self._sort_pairs}, root={self.root_hex()!r})"
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def leaf_index(self, item: Item) -> int | None:
        """First leaf position whose digest equals H(item), or None."""
        leaf = hash_item(item, self._hash_fn)
        for index, candidate in enumerate(self.leaves):
            if candidate == leaf:
                return index
        return None

    def contains(self, item: Item) -> bool:
        return self.leaf_index(item) is not None

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def proof(self, item: Item) -> Proof:
        """
        Generate a membership proof for item.

        If the item occurs more than once, the proof is for its first
        position.

        Raises:
            NotFoundError: If H(item) is not a leaf of this tree
        """
        index = self.leaf_index(item)
        if index is None:
            leaf_hex = to_hex(hash_item(item, self._hash_fn))
            raise NotFoundError(
                f"Item is not a member of this tree (leaf {leaf_hex})",
                leaf_hex=leaf_hex,
            )
        return self.proof_for_index(index)

    def proof_for_index(self, index: int) -> Proof:
        """
        Generate a membership proof for the leaf at index.

        Algorithm:
        1. Start at the target leaf index
        2. At each level below the root:
           - Record the sibling at index XOR 1
           - Record its side unless sort_pairs is enabled
           - Move up: index = index // 2

        Raises:
            IndexError: If index is out of range
        """
        if index < 0 or index >= self._leaf_count:
            raise IndexError(
                f"Leaf index {index} out of range for {self._leaf_count} leaves"
            )

        steps: list[ProofStep] = []
        position = index
        for layer in self._layers[:-1]:
            sibling_position = position ^ 1
            if self._sort_pairs:
                side = None
            elif position % 2 == 0:
                side = Side.RIGHT
            else:
                side = Side.LEFT
            steps.append(ProofStep(sibling=layer[sibling_position], side=side))
            position //= 2

        logger.debug(f"Generated {len(steps)}-step proof for leaf index {index}")
        return Proof(steps=tuple(steps))

    def hex_proof(self, item: Item) -> list[str]:
        """Membership proof for item as a list of lowercase hex siblings."""
        return self.proof(item).to_hex()

    def verify(self, item: Item, proof: Proof) -> bool:
        """Verify a proof against this tree's own root and settings."""
        return verify_proof(
            item,
            proof,
            self.root(),
            hash_fn=self._hash_fn,
            sort_pairs=self._sort_pairs,
        )


def build_tree(
    items: Iterable[Item],
    hash_fn: HashPrimitive = sha256,
    sort_pairs: bool = False,
) -> MerkleTree:
    """Convenience wrapper around MerkleTree.build()."""
    return MerkleTree.build(items, hash_fn=hash_fn, sort_pairs=sort_pairs)


def generate_proof(tree: MerkleTree, item: Item) -> Proof:
    """Convenience wrapper around MerkleTree.proof()."""
    return tree.proof(item)


def _coerce_steps(proof: Proof | Sequence[ProofStep]) -> tuple[ProofStep, ...]:
    if isinstance(proof, Proof):
        return proof.steps
    if isinstance(proof, (list, tuple)):
        return tuple(proof)
    raise MalformedProofError(
        f"Proof must be a Proof or a sequence of ProofStep, got {type(proof).__name__}"
    )


def _check_step(
    step: object,
    step_index: int,
    digest_size: int,
    sort_pairs: bool,
) -> tuple[bytes, Side | None]:
    """Validate the structure of one proof step."""
    if not isinstance(step, ProofStep):
        raise MalformedProofError(
            f"Proof step must be a ProofStep, got {type(step).__name__}",
            step_index=step_index,
        )

    sibling = step.sibling
    if not isinstance(sibling, (bytes, bytearray)):
        raise MalformedProofError(
            f"Sibling must be bytes, got {type(sibling).__name__}",
            step_index=step_index,
        )
    if len(sibling) != digest_size:
        raise MalformedProofError(
            f"Sibling has length {len(sibling)}, expected {digest_size}",
            step_index=step_index,
            details={"expected_length": digest_size, "actual_length": len(sibling)},
        )

    if sort_pairs:
        return bytes(sibling), None

    # Positional proofs need to know where the sibling goes
    if step.side is None:
        raise MalformedProofError(
            "Proof step is missing a side indicator",
            step_index=step_index,
        )
    try:
        side = Side(step.side)
    except ValueError:
        raise MalformedProofError(
            f"Unknown side indicator: {step.side!r}",
            step_index=step_index,
        ) from None
    return bytes(sibling), side


def _ordered_concat(
    current: bytes,
    sibling: bytes,
    side: Side | None,
    sort_pairs: bool,
) -> bytes:
    if sort_pairs:
        if sibling < current:
            return sibling + current
        return current + sibling
    if side is Side.LEFT:
        return sibling + current
    return current + sibling


def verify_proof(
    item: Item,
    proof: Proof | Sequence[ProofStep],
    root: bytes,
    hash_fn: HashPrimitive = sha256,
    sort_pairs: bool = False,
) -> bool:
    """
    Verify that item is a member of the set committed to by root.

    Recomputes the root from H(item) and the proof siblings, then
    compares it to the claimed root in constant time. Every step is
    consumed even after a mismatch would already be certain.

    Algorithm:
    1. Start with current = H(item)
    2. For each step (bottom-up):
       - sort_pairs: current = H(min(current, sibling) + max(...))
       - sibling on the left: current = H(sibling + current)
       - sibling on the right: current = H(current + sibling)
    3. Check computed root equals claimed root

    Args:
        item: The claimed member
        proof: Proof (or sequence of ProofStep) from leaf to root
        root: The trusted root digest
        hash_fn: Hash primitive the tree was built with
        sort_pairs: Pairing policy the tree was built with

    Returns:
        True if the proof is valid, False otherwise

    Raises:
        MalformedProofError: If the proof or root is structurally corrupt
                             (wrong types, wrong digest length, missing side)
    """
    current = hash_item(item, hash_fn)
    digest_size = len(current)

    if not isinstance(root, (bytes, bytearray)):
        raise MalformedProofError(f"Root must be bytes, got {type(root).__name__}")
    if len(root) != digest_size:
        raise MalformedProofError(
            f"Root has length {len(root)}, expected {digest_size}",
            details={"expected_length": digest_size, "actual_length": len(root)},
        )

    for step_index, step in enumerate(_coerce_steps(proof)):
        sibling, side = _check_step(step, step_index, digest_size, sort_pairs)
        current = hash_fn(_ordered_concat(current, sibling, side, sort_pairs))

    return hmac.compare_digest(current, bytes(root))


__all__ = [
    "Side",
    "ProofStep",
    "Proof",
    "MerkleTree",
    "combine",
    "compute_tree_height",
    "build_tree",
    "generate_proof",
    "verify_proof",
]
