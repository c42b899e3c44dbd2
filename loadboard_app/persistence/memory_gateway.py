"""In-process persistence gateway."""

import threading
from typing import Callable, Optional

from ..data.models import AppState
from .gateway import PersistenceGateway


class InMemoryGateway(PersistenceGateway):
    """Keeps the serialized document in memory; nothing survives the process."""

    def __init__(
        self,
        document: Optional[str] = None,
        seed_factory: Optional[Callable[[], AppState]] = None,
        seed_on_empty: bool = True
    ):
        super().__init__("memory", seed_factory=seed_factory, seed_on_empty=seed_on_empty)
        self._document = document
        self._lock = threading.Lock()

    @property
    def document(self) -> Optional[str]:
        """Last written JSON text."""
        return self._document

    def _read_document(self) -> Optional[str]:
        with self._lock:
            return self._document

    def _write_document(self, document: str) -> None:
        with self._lock:
            self._document = document

    def health_check(self) -> bool:
        return True
