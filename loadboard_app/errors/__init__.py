"""
Error classification for the load board core.

Request errors are raised before any state mutation and are always
recoverable at the call site. Storage failures come from the persistence
gateway; a failed save rolls the in-memory state back.
"""

from .request_errors import (
    LoadBoardRequestError,
    ValidationError,
    DuplicateSubscriptionError,
    NotFoundError,
)
from .storage_failures import (
    StorageFailureError,
    PersistenceError,
    MalformedStoreError,
)

__all__ = [
    # Request Errors
    "LoadBoardRequestError",
    "ValidationError",
    "DuplicateSubscriptionError",
    "NotFoundError",
    # Storage Failures
    "StorageFailureError",
    "PersistenceError",
    "MalformedStoreError",
]
