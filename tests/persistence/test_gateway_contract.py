"""Tests for the PersistenceGateway load/save contract."""

from unittest.mock import Mock

import pytest

from loadboard_app.data.models import AppState
from loadboard_app.data.seed import default_app_state
from loadboard_app.errors import MalformedStoreError, PersistenceError
from loadboard_app.persistence.gateway import PersistenceGateway
from loadboard_app.persistence.memory_gateway import InMemoryGateway


class ScriptedGateway(PersistenceGateway):
    """Gateway whose reads and writes are driven by Mocks."""

    def __init__(self, **kwargs):
        super().__init__("scripted", **kwargs)
        self.read = Mock(return_value=None)
        self.write = Mock()

    def _read_document(self):
        return self.read()

    def _write_document(self, document):
        self.write(document)

    def health_check(self):
        return True


class TestLoad:
    """Test PersistenceGateway.load."""

    def test_absent_document_seeds_and_writes_back(self):
        gateway = ScriptedGateway()

        state = gateway.load()

        assert state == default_app_state()
        gateway.write.assert_called_once()

    def test_malformed_document_seeds_and_writes_back(self):
        gateway = ScriptedGateway()
        gateway.read.return_value = "{ definitely not json"

        assert gateway.load() == default_app_state()
        gateway.write.assert_called_once()

    def test_wrong_shape_seeds(self):
        gateway = ScriptedGateway()
        gateway.read.return_value = '{"loads": "nope", "carrierEmails": []}'

        assert gateway.load() == default_app_state()

    def test_malformed_store_error_seeds(self):
        gateway = ScriptedGateway()
        gateway.read.side_effect = MalformedStoreError("bad row", reason="null_document")

        assert gateway.load() == default_app_state()
        gateway.write.assert_called_once()

    def test_read_error_returns_defaults_without_writing(self):
        gateway = ScriptedGateway()
        gateway.read.side_effect = OSError("disk gone")

        assert gateway.load() == default_app_state()
        gateway.write.assert_not_called()

    def test_failed_write_back_still_returns_defaults(self):
        gateway = ScriptedGateway()
        gateway.write.side_effect = OSError("read only")

        assert gateway.load() == default_app_state()

    def test_seed_on_empty_disabled(self):
        gateway = ScriptedGateway(seed_on_empty=False)

        gateway.load()
        gateway.write.assert_not_called()

    def test_custom_seed_factory(self):
        gateway = ScriptedGateway(seed_factory=AppState)
        assert gateway.load() == AppState()

    def test_valid_document_is_returned(self, sample_state):
        gateway = ScriptedGateway()
        gateway.read.return_value = gateway.serialize(sample_state)

        assert gateway.load() == sample_state
        gateway.write.assert_not_called()

    def test_skipped_loads_not_written_back(self, sample_state):
        gateway = ScriptedGateway()
        document = sample_state.to_dict()
        document["loads"].append({"id": "half-a-load"})
        gateway.read.return_value = document

        assert gateway.load() == sample_state
        gateway.write.assert_not_called()


class TestSave:
    """Test PersistenceGateway.save."""

    def test_write_failure_raises_persistence_error(self, sample_state):
        gateway = ScriptedGateway()
        gateway.write.side_effect = OSError("disk full")

        with pytest.raises(PersistenceError) as exc_info:
            gateway.save(sample_state)

        assert exc_info.value.operation == "save"
        assert gateway.get_stats()["error_count"] == 1

    def test_successful_save_counts(self, sample_state):
        gateway = ScriptedGateway()
        gateway.save(sample_state)

        assert gateway.get_stats() == {"name": "scripted", "save_count": 1, "error_count": 0}


class TestInMemoryGateway:
    """Test InMemoryGateway."""

    def test_round_trip(self, sample_state):
        gateway = InMemoryGateway()
        gateway.save(sample_state)

        assert gateway.load() == sample_state

    def test_empty_gateway_seeds(self):
        gateway = InMemoryGateway()

        assert gateway.load() == default_app_state()
        assert gateway.document is not None

    def test_health_check(self):
        assert InMemoryGateway().health_check()
