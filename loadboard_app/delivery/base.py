"""Base classes for notification delivery mechanisms."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import structlog

from .drafts import MessageDraft


class DeliveryStatus(Enum):
    """Notification delivery status."""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class DeliveryResult:
    """Result of a notification delivery attempt."""
    status: DeliveryStatus
    message: Optional[str] = None
    delivery_time_ms: Optional[int] = None
    error: Optional[Exception] = None

    @property
    def delivered(self) -> bool:
        return self.status == DeliveryStatus.SUCCESS


class BaseNotificationDelivery(ABC):
    """Base class for notification delivery mechanisms."""

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"notification.delivery.{name}")
        self._delivery_count = 0
        self._error_count = 0

    @abstractmethod
    def deliver(self, draft: MessageDraft) -> DeliveryResult:
        """
        Hand a message draft to the delivery target.

        Args:
            draft: Composed message

        Returns:
            Delivery result
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Check if delivery mechanism is healthy."""
        pass

    def send(self, draft: MessageDraft) -> DeliveryResult:
        """
        Deliver a draft, converting unexpected errors into a FAILED result.

        Never raises; callers decide what a failed notification means.
        """
        start_time = time.time()
        try:
            result = self.deliver(draft)
        except Exception as e:
            self.logger.error(
                "Notification delivery raised",
                delivery_name=self.name,
                subject=draft.subject,
                error=str(e)
            )
            result = DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"Delivery error: {e}",
                error=e
            )

        result.delivery_time_ms = int((time.time() - start_time) * 1000)
        if result.status == DeliveryStatus.SUCCESS:
            self._delivery_count += 1
        elif result.status == DeliveryStatus.FAILED:
            self._error_count += 1
        return result

    def get_stats(self) -> dict[str, Any]:
        """Get delivery statistics."""
        return {
            "name": self.name,
            "delivery_count": self._delivery_count,
            "error_count": self._error_count,
            "success_rate": (
                self._delivery_count / (self._delivery_count + self._error_count)
                if (self._delivery_count + self._error_count) > 0 else 0.0
            )
        }

    def reset_stats(self):
        """Reset delivery statistics."""
        self._delivery_count = 0
        self._error_count = 0
