"""Base class for application state persistence gateways."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import structlog

from ..data.models import AppState
from ..data.parsers import parse_app_state, serialize_app_state
from ..data.seed import default_app_state
from ..errors import MalformedStoreError, PersistenceError


class PersistenceGateway(ABC):
    """
    Durable read/write boundary for the whole AppState document.

    Subclasses implement raw document I/O; this base class owns the contract:
    reads never fail (they fall back to seeded defaults) and writes either
    happen or raise PersistenceError.
    """

    def __init__(
        self,
        name: str,
        seed_factory: Optional[Callable[[], AppState]] = None,
        seed_on_empty: bool = True
    ):
        self.name = name
        self.seed_factory = seed_factory or default_app_state
        self.seed_on_empty = seed_on_empty
        self.logger = structlog.get_logger(f"persistence.{name}")
        self._save_count = 0
        self._error_count = 0

    @abstractmethod
    def _read_document(self) -> Optional[Any]:
        """
        Read the raw stored document.

        Returns:
            JSON text, bytes or a decoded object; None when nothing is stored

        Raises:
            MalformedStoreError: Stored bytes exist but cannot be interpreted
            Exception: Any other read failure
        """
        pass

    @abstractmethod
    def _write_document(self, document: str) -> None:
        """
        Durably write the serialized document.

        Raises:
            Exception: Any write failure; the write must not be partially visible
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the backing store is reachable and writable."""
        pass

    def load(self) -> AppState:
        """
        Load the application state.

        Read errors fall back to seeded defaults without touching the store.
        An absent or structurally invalid document is replaced by seeded
        defaults, which are written back.
        """
        try:
            raw = self._read_document()
        except MalformedStoreError as e:
            self.logger.warning(
                "Stored application state is unreadable, seeding defaults",
                gateway=self.name,
                reason=e.reason,
                error=str(e)
            )
            return self._seed()
        except Exception as e:
            self.logger.error(
                "Failed to read application state, using defaults",
                gateway=self.name,
                error=str(e)
            )
            return self.seed_factory()

        if raw is None:
            self.logger.info("No stored application state, seeding defaults", gateway=self.name)
            return self._seed()

        result = parse_app_state(raw)
        if not result.success:
            self.logger.warning(
                "Stored application state is malformed, seeding defaults",
                gateway=self.name,
                error=result.error_msg
            )
            return self._seed()

        if result.skipped_loads:
            self.logger.warning(
                "Loaded application state with skipped loads",
                gateway=self.name,
                skipped_loads=result.skipped_loads
            )

        return result.state

    def save(self, state: AppState) -> None:
        """
        Persist the whole application state.

        Raises:
            PersistenceError: If the write did not happen
        """
        try:
            document = self.serialize(state)
            self._write_document(document)
        except PersistenceError:
            self._error_count += 1
            raise
        except Exception as e:
            self._error_count += 1
            self.logger.error(
                "Failed to save application state",
                gateway=self.name,
                error=str(e)
            )
            raise PersistenceError(
                f"Failed to save application state: {e}",
                operation="save",
                target=self.name
            ) from e

        self._save_count += 1
        self.logger.debug(
            "Application state saved",
            gateway=self.name,
            loads=len(state.loads),
            carrier_emails=len(state.carrier_emails)
        )

    def serialize(self, state: AppState) -> str:
        """Serialize the state document; subclasses may override the format."""
        return serialize_app_state(state)

    def get_stats(self) -> dict[str, Any]:
        """Get save statistics."""
        return {
            "name": self.name,
            "save_count": self._save_count,
            "error_count": self._error_count,
        }

    def _seed(self) -> AppState:
        state = self.seed_factory()
        if not self.seed_on_empty:
            return state

        try:
            self.save(state)
        except PersistenceError as e:
            self.logger.warning(
                "Failed to write seeded application state",
                gateway=self.name,
                error=str(e)
            )
        return state
