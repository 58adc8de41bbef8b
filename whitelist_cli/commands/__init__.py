"""
CLI command modules.
"""

from whitelist_cli.commands import tree, verify

__all__ = ["tree", "verify"]
