"""Optimistic apply / persist / revert over the application state."""

import threading
from typing import Callable, Optional, TypeVar

import structlog

from ..data.models import AppState
from ..errors import PersistenceError
from ..persistence.gateway import PersistenceGateway

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Mutation = Callable[[AppState], tuple[AppState, T]]


class OptimisticTransaction:
    """
    Holds the current AppState and applies mutations optimistically.

    A mutation is applied immediately, then persisted; if the save fails the
    exact pre-mutation snapshot is restored and PersistenceError is raised.
    One lock is held from computing the new state until the save (or revert)
    finishes, so every mutation builds on the latest value.
    """

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway
        self._state: Optional[AppState] = None
        self._lock = threading.RLock()

    @property
    def state(self) -> AppState:
        """Current snapshot; loaded from the gateway on first access."""
        with self._lock:
            if self._state is None:
                self._state = self.gateway.load()
            return self._state

    def reload(self) -> AppState:
        """Discard the in-memory state and read it again from the gateway."""
        with self._lock:
            self._state = self.gateway.load()
            return self._state

    def run(self, mutate: Mutation, operation: str = "mutation") -> T:
        """
        Apply and persist a mutation.

        Args:
            mutate: Receives the current state, returns (new_state, result).
                Exceptions raised here propagate before anything is applied.
                Returning the current state object unchanged skips the save.
            operation: Name used in log records

        Returns:
            The mutation's result

        Raises:
            PersistenceError: If the save failed; the state has been reverted
        """
        with self._lock:
            snapshot = self.state
            new_state, result = mutate(snapshot)

            if new_state is snapshot:
                return result

            self._state = new_state
            try:
                self.gateway.save(new_state)
            except PersistenceError as e:
                self._revert(snapshot, operation, e)
                raise
            except Exception as e:
                self._revert(snapshot, operation, e)
                raise PersistenceError(
                    f"Failed to persist {operation}: {e}",
                    operation=operation,
                    target=getattr(self.gateway, "name", None)
                ) from e

            return result

    def _revert(self, snapshot: AppState, operation: str, error: Exception) -> None:
        self._state = snapshot
        logger.warning(
            "Reverted optimistic update after failed save",
            operation=operation,
            error=str(error)
        )
