"""
Merkle Whitelist CLI

Command-line interface for committing to a whitelist and proving membership.

Usage:
    python -m whitelist_cli root
    python -m whitelist_cli proof email2@example.com --out proof.json
    python -m whitelist_cli verify --proof proof.json --root <hex>
    python -m whitelist_cli config --init
"""

__version__ = "0.1.0"
