"""
CLI Tree Commands

Build the whitelist tree and print its root or a member's proof.

Usage:
    merkle-whitelist root [ITEM ...] [--items-file PATH] [--json]
    merkle-whitelist proof ITEM [--items-file PATH] [--json] [--out PATH]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path

from whitelist_core.config.runtime import RuntimeConfig, WhitelistConfig
from whitelist_core.crypto.hashing import get_hash_primitive
from whitelist_core.merkle import MerkleTree
from whitelist_core.schemas.errors import NotFoundError
from whitelist_core.schemas.transport import ProofDocument


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NOT_FOUND = 2


@dataclass
class TreeSettings:
    """Tree settings after applying command-line overrides to the config."""
    hash_algorithm: str
    sort_pairs: bool


def resolve_settings(args: Namespace) -> TreeSettings:
    """Command-line flags win over the loaded configuration."""
    config: RuntimeConfig = args.cli_config
    hash_algorithm = getattr(args, "hash", None) or config.tree.hash_algorithm
    sort_pairs = getattr(args, "sort_pairs", None)
    if sort_pairs is None:
        sort_pairs = config.tree.sort_pairs
    return TreeSettings(hash_algorithm=hash_algorithm, sort_pairs=sort_pairs)


def collect_items(args: Namespace) -> list[str]:
    """
    Items given on the command line replace the configured whitelist.

    Otherwise the whitelist comes from the configuration (inline items
    plus its items file).
    """
    cli_items = list(getattr(args, "items", None) or [])
    items_file = getattr(args, "items_file", None)
    if cli_items or items_file:
        return WhitelistConfig(items=cli_items, items_file=items_file).load_items()
    config: RuntimeConfig = args.cli_config
    return config.whitelist.load_items()


def build_from_args(args: Namespace) -> tuple[MerkleTree, TreeSettings]:
    """Build the tree described by args and the loaded configuration."""
    settings = resolve_settings(args)
    items = collect_items(args)
    logger.info(
        f"Building tree over {len(items)} items "
        f"(hash={settings.hash_algorithm}, sort_pairs={settings.sort_pairs})"
    )
    tree = MerkleTree.build(
        items,
        hash_fn=get_hash_primitive(settings.hash_algorithm),
        sort_pairs=settings.sort_pairs,
    )
    return tree, settings


def root_cmd(args: Namespace) -> int:
    """Handle the root command."""
    tree, settings = build_from_args(args)

    if args.json:
        print(json.dumps({
            "root": tree.root_hex(),
            "leaf_count": tree.leaf_count,
            "height": tree.height,
            "hash_algorithm": settings.hash_algorithm,
            "sort_pairs": settings.sort_pairs,
        }, indent=2))
    else:
        print(tree.root_hex())

    return EXIT_SUCCESS


def proof_cmd(args: Namespace) -> int:
    """Handle the proof command."""
    tree, settings = build_from_args(args)

    try:
        proof = tree.proof(args.item)
    except NotFoundError as e:
        logger.info(f"Item not whitelisted: {args.item}")
        if args.json:
            print(e.to_error_model().model_dump_json(indent=2))
        else:
            print(f"Not whitelisted: {args.item}", file=sys.stderr)
        return EXIT_NOT_FOUND

    document = ProofDocument.from_proof(
        item=args.item,
        proof=proof,
        root=tree.root(),
        hash_algorithm=settings.hash_algorithm,
        sort_pairs=settings.sort_pairs,
    )

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(document.model_dump_json(indent=2))
        logger.info(f"Proof written to: {out_path}")

    if args.json:
        print(document.model_dump_json(indent=2))
    else:
        print(f"Merkle Proof for {args.item}:")
        for sibling in proof.to_hex():
            print(sibling)

    return EXIT_SUCCESS
