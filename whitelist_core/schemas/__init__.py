"""
Schemas

Error models and exceptions shared across the package. Hex transport
models live in whitelist_core.schemas.transport.
"""

from .errors import (
    EmptyInputError,
    ErrorCodes,
    MalformedProofError,
    NotFoundError,
    UnknownHashAlgorithmError,
    WhitelistError,
    WhitelistException,
)

__all__ = [
    "EmptyInputError",
    "ErrorCodes",
    "MalformedProofError",
    "NotFoundError",
    "UnknownHashAlgorithmError",
    "WhitelistError",
    "WhitelistException",
]
