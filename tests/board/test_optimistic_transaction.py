"""Tests for the optimistic apply / persist / revert helper."""

from unittest.mock import Mock

import pytest

from loadboard_app.board.transaction import OptimisticTransaction
from loadboard_app.data.models import AppState
from loadboard_app.errors import NotFoundError, PersistenceError


@pytest.fixture
def gateway(sample_state):
    gateway = Mock()
    gateway.name = "mock"
    gateway.load.return_value = sample_state
    return gateway


class TestOptimisticTransaction:
    """Test OptimisticTransaction.run."""

    def test_state_loaded_lazily_once(self, gateway, sample_state):
        transaction = OptimisticTransaction(gateway)
        gateway.load.assert_not_called()

        assert transaction.state == sample_state
        assert transaction.state == sample_state
        gateway.load.assert_called_once()

    def test_commit_applies_and_saves(self, gateway):
        transaction = OptimisticTransaction(gateway)
        new_state = AppState()

        result = transaction.run(lambda current: (new_state, "done"))

        assert result == "done"
        assert transaction.state is new_state
        gateway.save.assert_called_once_with(new_state)

    def test_save_failure_restores_snapshot(self, gateway, sample_state, persistence_error):
        gateway.save.side_effect = persistence_error
        transaction = OptimisticTransaction(gateway)

        with pytest.raises(PersistenceError):
            transaction.run(lambda current: (AppState(), None))

        assert transaction.state is sample_state

    def test_unexpected_save_error_is_wrapped(self, gateway, sample_state):
        gateway.save.side_effect = RuntimeError("boom")
        transaction = OptimisticTransaction(gateway)

        with pytest.raises(PersistenceError) as exc_info:
            transaction.run(lambda current: (AppState(), None), operation="post_load")

        assert exc_info.value.operation == "post_load"
        assert transaction.state is sample_state

    def test_state_is_optimistic_during_save(self, gateway):
        transaction = OptimisticTransaction(gateway)
        new_state = AppState()
        seen = []
        gateway.save.side_effect = lambda state: seen.append(transaction.state)

        transaction.run(lambda current: (new_state, None))

        assert seen == [new_state]

    def test_mutation_error_changes_nothing(self, gateway, sample_state):
        transaction = OptimisticTransaction(gateway)

        def mutate(current):
            raise NotFoundError("missing", load_id="x")

        with pytest.raises(NotFoundError):
            transaction.run(mutate)

        assert transaction.state is sample_state
        gateway.save.assert_not_called()

    def test_unchanged_state_skips_save(self, gateway):
        transaction = OptimisticTransaction(gateway)

        transaction.run(lambda current: (current, None))

        gateway.save.assert_not_called()

    def test_sequential_mutations_chain(self, gateway, sample_state):
        transaction = OptimisticTransaction(gateway)

        transaction.run(lambda current: (current.with_carrier_emails(current.carrier_emails + ("a@b.co",)), None))
        transaction.run(lambda current: (current.with_carrier_emails(current.carrier_emails + ("c@d.co",)), None))

        assert transaction.state.carrier_emails == sample_state.carrier_emails + ("a@b.co", "c@d.co")

    def test_reload(self, gateway):
        transaction = OptimisticTransaction(gateway)
        transaction.state
        gateway.load.return_value = AppState()

        assert transaction.reload() == AppState()
