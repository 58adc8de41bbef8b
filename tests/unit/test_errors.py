"""
Error Taxonomy Tests
Tests for whitelist_core/schemas/errors.py
"""
import pytest
from pydantic import ValidationError

from whitelist_core.schemas.errors import (
    EmptyInputError,
    ErrorCodes,
    MalformedProofError,
    NotFoundError,
    UnknownHashAlgorithmError,
    WhitelistError,
    WhitelistException,
)


class TestExceptions:
    """Tests for exception codes and details."""

    def test_all_derive_from_base(self):
        for exc_type in (EmptyInputError, NotFoundError, MalformedProofError, UnknownHashAlgorithmError):
            assert issubclass(exc_type, WhitelistException)

    def test_empty_input_default_message(self):
        exc = EmptyInputError()

        assert exc.code == ErrorCodes.EMPTY_INPUT
        assert "empty" in str(exc)
        assert exc.retryable is False

    def test_not_found_carries_leaf(self):
        exc = NotFoundError("missing", leaf_hex="ab" * 32)

        assert exc.code == ErrorCodes.LEAF_NOT_FOUND
        assert exc.details == {"leaf": "ab" * 32}

    def test_malformed_carries_step_index(self):
        exc = MalformedProofError("bad", step_index=0, details={"actual_length": 3})

        assert exc.code == ErrorCodes.MALFORMED_PROOF
        assert exc.details == {"actual_length": 3, "step_index": 0}

    def test_repr(self):
        exc = NotFoundError("missing")

        assert repr(exc) == "NotFoundError(code='LEAF_NOT_FOUND', message='missing')"


class TestErrorModel:
    """Tests for WhitelistError <-> WhitelistException conversion."""

    def test_exception_to_model(self):
        model = NotFoundError("missing", leaf_hex="00").to_error_model()

        assert isinstance(model, WhitelistError)
        assert model.code == ErrorCodes.LEAF_NOT_FOUND
        assert model.details["leaf"] == "00"

    def test_model_to_exception(self):
        model = WhitelistError(code=ErrorCodes.MALFORMED_PROOF, message="corrupt")
        exc = model.to_exception()

        assert isinstance(exc, WhitelistException)
        assert exc.code == ErrorCodes.MALFORMED_PROOF
        assert exc.message == "corrupt"

    def test_model_forbids_extra_fields(self):
        with pytest.raises(ValidationError):
            WhitelistError(code="X", message="y", unexpected=True)

    def test_model_json_dump(self):
        model = EmptyInputError().to_error_model()
        data = model.model_dump()

        assert data["code"] == "EMPTY_INPUT"
        assert data["retryable"] is False
