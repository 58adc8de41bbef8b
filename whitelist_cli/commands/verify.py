"""
CLI Verify Command

Verify a proof document offline against a root. Needs no whitelist and
no tree: only the proof and the root.

Usage:
    merkle-whitelist verify [ITEM] --proof proof.json [--root HEX] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from pydantic import ValidationError

from whitelist_core.crypto.hashing import (
    HashPrimitive,
    from_hex,
    get_hash_primitive,
    hash_item,
    to_hex,
)
from whitelist_core.merkle import verify_proof
from whitelist_core.schemas.errors import ErrorCodes, MalformedProofError
from whitelist_core.schemas.transport import ProofDocument


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def load_document(path: Path) -> ProofDocument:
    """
    Read a proof document from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the JSON does not match ProofDocument
    """
    if not path.exists():
        raise FileNotFoundError(f"Proof file not found: {path}")
    return ProofDocument.model_validate_json(path.read_text())


def check_leaf(document: ProofDocument, hash_fn: HashPrimitive) -> None:
    """
    Check that the document's leaf is the hash of the document's own item.

    Raises:
        MalformedProofError: If the stored leaf does not match
    """
    expected = to_hex(hash_item(document.item, hash_fn))
    if document.leaf != expected:
        raise MalformedProofError(
            "Proof document leaf does not match its item",
            details={"expected_leaf": expected, "document_leaf": document.leaf},
        )


def verify_cmd(args: Namespace) -> int:
    """Handle the verify command."""
    try:
        document = load_document(Path(args.proof))
    except ValidationError as e:
        print(f"Error: invalid proof document: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    item = args.item if args.item is not None else document.item

    if args.root:
        root = from_hex(args.root)
    else:
        logger.warning("No --root given, trusting the root stored in the proof document")
        root = document.root_bytes()

    # Explicit flags win over what the document says
    hash_algorithm = getattr(args, "hash", None) or document.hash_algorithm
    sort_pairs = getattr(args, "sort_pairs", None)
    if sort_pairs is None:
        sort_pairs = document.sort_pairs

    hash_fn = get_hash_primitive(hash_algorithm)

    try:
        check_leaf(document, hash_fn)
        ok = verify_proof(
            item,
            document.to_proof(),
            root,
            hash_fn=hash_fn,
            sort_pairs=sort_pairs,
        )
    except MalformedProofError as e:
        logger.error(f"Malformed proof: {e.message}")
        if args.json:
            print(e.to_error_model().model_dump_json(indent=2))
        else:
            print(f"Error: malformed proof: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps({
            "item": item,
            "root": root.hex(),
            "valid": ok,
            "code": None if ok else ErrorCodes.ROOT_MISMATCH,
            "hash_algorithm": hash_algorithm,
            "sort_pairs": sort_pairs,
        }, indent=2))
    else:
        print("VALID" if ok else "INVALID")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
