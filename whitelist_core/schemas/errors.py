"""
Schemas
File: errors.py

Purpose: Error taxonomy for tree construction, proof generation and
proof verification. Defines both a Pydantic model for structured error
reporting and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Construction Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    UNKNOWN_HASH_ALGORITHM = "UNKNOWN_HASH_ALGORITHM"

    # Proof Errors
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"
    MALFORMED_PROOF = "MALFORMED_PROOF"

    # Verification Outcomes
    ROOT_MISMATCH = "ROOT_MISMATCH"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class WhitelistError(BaseModel):
    """
    Error model for structured error reporting.

    Used when an error has to be rendered (e.g. as CLI JSON output)
    rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_NOT_FOUND],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "WhitelistException":
        """Convert this error model to a raised exception."""
        return WhitelistException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class WhitelistException(Exception):
    """
    Base exception for all commitment engine errors.

    Carries structured error information and converts to/from
    WhitelistError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "WHITELIST_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> WhitelistError:
        """Convert this exception to a WhitelistError model."""
        return WhitelistError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(WhitelistException):
    """Raised when a tree is built from zero items."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty item list",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class NotFoundError(WhitelistException):
    """Raised when a proof is requested for an item that is not a leaf."""

    def __init__(
        self,
        message: str,
        leaf_hex: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_hex:
            full_details["leaf"] = leaf_hex
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class MalformedProofError(WhitelistException):
    """
    Raised when proof data is structurally corrupt.

    Distinct from a proof that is well-formed but does not verify,
    which is reported as False.
    """

    def __init__(
        self,
        message: str,
        step_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if step_index is not None:
            full_details["step_index"] = step_index
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
            retryable=False,
        )


class UnknownHashAlgorithmError(WhitelistException):
    """Raised when configuration names a hash primitive that is not registered."""

    def __init__(
        self,
        algorithm: str,
        available: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {"algorithm": algorithm}
        if available:
            details["available"] = available
        super().__init__(
            message=f"Unknown hash algorithm: {algorithm!r}",
            code=ErrorCodes.UNKNOWN_HASH_ALGORITHM,
            details=details,
            retryable=False,
        )
