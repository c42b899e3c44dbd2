"""
Request error classifications for load board operations.

These exceptions describe bad input to a mutating operation. They are raised
before the store touches its state or the persistence gateway.
"""

from typing import Optional, Dict, Any


class LoadBoardRequestError(Exception):
    """Base class for rejected requests that leave state untouched."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class ValidationError(LoadBoardRequestError):
    """Malformed input such as zero destinations or a non-positive bid."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class DuplicateSubscriptionError(ValidationError):
    """Email address already present in the subscriber set."""

    def __init__(self, message: str, email: Optional[str] = None, **kwargs):
        super().__init__(message, field="email", value=email, **kwargs)
        self.email = email


class NotFoundError(LoadBoardRequestError):
    """Operation addressed a load id absent from the collection."""

    def __init__(self, message: str, load_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.load_id = load_id
