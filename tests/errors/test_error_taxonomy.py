"""Tests for the load board error taxonomy."""

import pytest

from loadboard_app.errors import (
    DuplicateSubscriptionError,
    LoadBoardRequestError,
    MalformedStoreError,
    NotFoundError,
    PersistenceError,
    StorageFailureError,
    ValidationError,
)


class TestRequestErrors:
    """Test request error classes."""

    def test_validation_error_fields(self):
        error = ValidationError("bad amount", field="amount", value=-1)

        assert isinstance(error, LoadBoardRequestError)
        assert error.field == "amount"
        assert error.value == -1
        assert error.recoverable

    def test_duplicate_is_validation_error(self):
        error = DuplicateSubscriptionError("This email is already subscribed.", email="a@b.co")

        assert isinstance(error, ValidationError)
        assert error.field == "email"
        assert error.email == "a@b.co"

    def test_not_found(self):
        error = NotFoundError("missing", load_id="load-9")

        assert isinstance(error, LoadBoardRequestError)
        assert error.load_id == "load-9"

    def test_context(self):
        error = ValidationError("bad", context={"source": "form"})
        assert error.context == {"source": "form"}


class TestStorageFailures:
    """Test storage failure classes."""

    def test_persistence_error(self):
        error = PersistenceError("disk full", operation="save", target="file")

        assert isinstance(error, StorageFailureError)
        assert error.operation == "save"
        assert error.target == "file"
        assert str(error) == "disk full"

    def test_malformed_store_error(self):
        error = MalformedStoreError("bad row", reason="null_document", raw_data=None)

        assert isinstance(error, StorageFailureError)
        assert error.reason == "null_document"

    def test_families_are_distinct(self):
        with pytest.raises(StorageFailureError):
            raise PersistenceError("x")
        assert not issubclass(PersistenceError, LoadBoardRequestError)
        assert not issubclass(ValidationError, StorageFailureError)
