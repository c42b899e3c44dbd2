"""JSON file persistence gateway for device-local storage."""

import contextlib
import fcntl
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional

from ..data.models import AppState
from ..errors import MalformedStoreError
from .gateway import PersistenceGateway


class JsonFileGateway(PersistenceGateway):
    """Stores the state document as a single JSON file."""

    def __init__(
        self,
        path: str,
        create_dirs: bool = True,
        seed_factory: Optional[Callable[[], AppState]] = None,
        seed_on_empty: bool = True
    ):
        super().__init__("file", seed_factory=seed_factory, seed_on_empty=seed_on_empty)
        self.path = Path(path)
        self.create_dirs = create_dirs

        if create_dirs:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read_document(self) -> Optional[str]:
        if not self.path.exists():
            return None

        with open(self.path, "rb") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH)
            raw = f.read()

        if not raw.strip():
            return None

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedStoreError(
                f"State file is not UTF-8 text: {self.path}",
                reason="encoding"
            ) from e

    def _write_document(self, document: str) -> None:
        # Each writer gets its own temp file beside the target, renamed into place once complete
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp"
        )
        replaced = False

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(document)
                f.flush()
                os.fsync(f.fileno())

            os.replace(tmp_name, self.path)
            replaced = True
        finally:
            if not replaced:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)

        self.logger.debug(
            "State file written",
            gateway=self.name,
            path=str(self.path),
            size=len(document)
        )

    def health_check(self) -> bool:
        """Check if the state directory is writable."""
        try:
            test_file = self.path.parent / ".health_check_test"
            test_file.write_text("test")
            test_file.unlink()
            return True

        except Exception as e:
            self.logger.warning(
                "Health check failed",
                gateway=self.name,
                error=str(e)
            )
            return False
