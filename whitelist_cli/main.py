"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m whitelist_cli root [ITEM ...] [--items-file PATH] [--json]
    python -m whitelist_cli proof ITEM [--items-file PATH] [--json] [--out PATH]
    python -m whitelist_cli verify [ITEM] --proof PATH [--root HEX] [--json]
    python -m whitelist_cli config --init|--show

Environment Variables:
    WHITELIST_HASH_ALGORITHM    Hash primitive: sha256, keccak256 (default: keccak256)
    WHITELIST_SORT_PAIRS        Sort sibling pairs before hashing (default: true)
    WHITELIST_ITEMS_FILE        File with one whitelisted item per line
    WHITELIST_LOG_LEVEL         Log level (default: INFO)
    WHITELIST_LOG_FILE          Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from whitelist_cli import __version__
from whitelist_cli.commands import tree, verify
from whitelist_core.config.runtime import get_default_config_template, load_config
from whitelist_core.crypto.hashing import HASH_PRIMITIVES
from whitelist_core.schemas.errors import WhitelistException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle-whitelist",
        description="Commit to a whitelist with a Merkle root, and generate or verify membership proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./whitelist.yaml, ./whitelist.json or ~/.config/merkle-whitelist/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--hash",
        type=str,
        default=None,
        choices=sorted(HASH_PRIMITIVES),
        help="Hash primitive (overrides config)",
    )
    parser.add_argument(
        "--sort-pairs",
        dest="sort_pairs",
        action="store_true",
        default=None,
        help="Sort sibling pairs before hashing (overrides config)",
    )
    parser.add_argument(
        "--no-sort-pairs",
        dest="sort_pairs",
        action="store_false",
        help="Hash sibling pairs in positional order (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the Merkle root of the whitelist",
        description="Build the tree over the whitelist and print its root as hex.",
    )
    root_parser.add_argument(
        "items",
        nargs="*",
        help="Items to commit to (default: whitelist from config)",
    )
    root_parser.add_argument(
        "--items-file",
        type=str,
        default=None,
        help="File with one item per line (replaces the configured whitelist)",
    )
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    root_parser.set_defaults(func=tree.root_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Generate a membership proof for one item",
        description="Build the tree over the whitelist and print the proof for ITEM.",
    )
    proof_parser.add_argument(
        "item",
        type=str,
        help="Item to prove membership of",
    )
    proof_parser.add_argument(
        "--items-file",
        type=str,
        default=None,
        help="File with one item per line (replaces the configured whitelist)",
    )
    proof_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document (JSON) to this path",
    )
    proof_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output the proof document as JSON",
    )
    proof_parser.set_defaults(func=tree.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a membership proof offline",
        description="Recompute the root from ITEM and a proof document and compare it to ROOT.",
    )
    verify_parser.add_argument(
        "item",
        nargs="?",
        default=None,
        help="Item to verify (default: the item named in the proof document)",
    )
    verify_parser.add_argument(
        "--proof", "-p",
        type=str,
        required=True,
        help="Path to a proof document written by 'proof --out'",
    )
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        default=None,
        help="Trusted root as hex (default: the root stored in the proof document)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="whitelist.yaml",
        help="Path for config file (default: whitelist.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your whitelist.")
        print("You can also use environment variables (WHITELIST_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: merkle-whitelist config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=not whitelisted / verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except WhitelistException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.log_level == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
