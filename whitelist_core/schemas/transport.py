"""
Schemas
File: transport.py

Purpose: Hex-rendered representation of a root and a membership proof,
for display and JSON hand-off to a party that only holds the root.
Formatting only: no tree logic lives here.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from whitelist_core.crypto.hashing import (
    HashPrimitive,
    from_hex,
    get_hash_primitive,
    hash_item,
    to_hex,
)
from whitelist_core.merkle.merkle_tree import Proof, ProofStep, Side


def _normalize_hex(value: str) -> str:
    """Validate a hex string and return it lowercase without prefix."""
    return to_hex(from_hex(value))


class ProofStepModel(BaseModel):
    """One proof step with its sibling rendered as hex."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: str = Field(
        ...,
        description="Sibling digest as lowercase hex",
    )
    side: Literal["left", "right"] | None = Field(
        default=None,
        description="Sibling position; omitted for sorted-pairs proofs",
    )

    @field_validator("sibling")
    @classmethod
    def _check_sibling(cls, v: str) -> str:
        return _normalize_hex(v)

    def to_step(self) -> ProofStep:
        return ProofStep(
            sibling=from_hex(self.sibling),
            side=Side(self.side) if self.side else None,
        )


class ProofDocument(BaseModel):
    """
    A self-describing membership proof.

    Carries everything a verifier needs besides trust in the root:
    the item, the hash algorithm name, the pairing policy and the steps.
    """

    model_config = ConfigDict(extra="forbid")

    item: str = Field(
        ...,
        description="The claimed member",
    )
    leaf: str = Field(
        ...,
        description="H(item) as lowercase hex",
    )
    root: str = Field(
        ...,
        description="Root digest the proof was generated against",
    )
    hash_algorithm: str = Field(
        default="sha256",
        description="Registered hash primitive name",
    )
    sort_pairs: bool = Field(
        default=False,
        description="Whether sibling pairs are sorted byte-wise before hashing",
    )
    steps: list[ProofStepModel] = Field(
        default_factory=list,
        description="Proof steps, leaf-adjacent first",
    )

    @field_validator("leaf", "root")
    @classmethod
    def _check_digest(cls, v: str) -> str:
        return _normalize_hex(v)

    @classmethod
    def from_proof(
        cls,
        item: str,
        proof: Proof,
        root: bytes,
        hash_algorithm: str = "sha256",
        sort_pairs: bool = False,
    ) -> "ProofDocument":
        """Render a Proof and root as a ProofDocument."""
        hash_fn = get_hash_primitive(hash_algorithm)
        return cls(
            item=item,
            leaf=to_hex(hash_item(item, hash_fn)),
            root=to_hex(root),
            hash_algorithm=hash_algorithm,
            sort_pairs=sort_pairs,
            steps=[
                ProofStepModel(
                    sibling=to_hex(step.sibling),
                    side=step.side.value if step.side else None,
                )
                for step in proof.steps
            ],
        )

    def to_proof(self) -> Proof:
        """Parse the steps back into a Proof."""
        return Proof(steps=tuple(step.to_step() for step in self.steps))

    def root_bytes(self) -> bytes:
        return from_hex(self.root)

    def hash_fn(self) -> HashPrimitive:
        """
        Resolve the hash primitive named by hash_algorithm.

        Raises:
            UnknownHashAlgorithmError: If the name is not registered
        """
        return get_hash_primitive(self.hash_algorithm)

    @property
    def siblings(self) -> list[str]:
        return [step.sibling for step in self.steps]
