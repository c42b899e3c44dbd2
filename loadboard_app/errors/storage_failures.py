"""
Storage failure classifications for the persistence gateway.

A failed save is recoverable by rolling the store back to its last
known-good state. A malformed stored document is handled by seeding
defaults and is never surfaced to callers.
"""

from typing import Optional, Dict, Any


class StorageFailureError(Exception):
    """Base class for persistence gateway failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class PersistenceError(StorageFailureError):
    """Read or write of the application state document failed."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target


class MalformedStoreError(StorageFailureError):
    """Stored payload does not have the expected application state shape."""

    def __init__(self, message: str, reason: Optional[str] = None,
                 raw_data: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.reason = reason
        self.raw_data = raw_data
