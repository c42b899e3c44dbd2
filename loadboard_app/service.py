"""
Application service facade.

Wires configuration, persistence, notification delivery and the load store
together, and turns store exceptions into the results and messages shown to
users.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar

import structlog

from .board.store import LoadStore
from .config.defaults import DefaultConfig, NotificationParams, PersistenceParams
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.models import Bid, Load, LoadDraft
from .delivery.base import BaseNotificationDelivery, DeliveryResult
from .delivery.drafts import compose_bid_draft
from .delivery.mailto_delivery import MailtoDelivery
from .delivery.notifier import NewLoadNotifier
from .delivery.stdout_delivery import StdoutDelivery
from .errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .geo.route import RouteDistance
from .logging.config import configure_logging
from .persistence.file_gateway import JsonFileGateway
from .persistence.gateway import PersistenceGateway
from .persistence.http_gateway import HttpJsonGateway
from .persistence.memory_gateway import InMemoryGateway
from .persistence.sqlite_gateway import SqliteDocumentGateway

logger = structlog.get_logger(__name__)

T = TypeVar("T")

LOAD_NOT_FOUND_MESSAGE = "This load is no longer available."


@dataclass
class OperationResult(Generic[T]):
    """Outcome of a user-facing operation."""
    success: bool
    message: str
    value: Optional[T] = None

    @classmethod
    def ok(cls, message: str, value: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, message=message, value=value)

    @classmethod
    def failed(cls, message: str) -> "OperationResult[T]":
        return cls(success=False, message=message)


def build_gateway(params: PersistenceParams) -> PersistenceGateway:
    """Create the persistence gateway named by the configuration."""
    if params.backend == "memory":
        return InMemoryGateway(seed_on_empty=params.seed_on_empty)
    if params.backend == "file":
        return JsonFileGateway(params.path, seed_on_empty=params.seed_on_empty)
    if params.backend == "sqlite":
        return SqliteDocumentGateway(params.path, seed_on_empty=params.seed_on_empty)
    if params.backend == "http":
        if not params.url:
            raise ValueError("HTTP persistence requires a url")
        return HttpJsonGateway(
            params.url,
            timeout_seconds=params.timeout_seconds,
            seed_on_empty=params.seed_on_empty
        )
    raise ValueError(f"Unknown persistence backend: {params.backend}")


def build_delivery(params: NotificationParams) -> BaseNotificationDelivery:
    """Create the notification delivery mechanism named by the configuration."""
    if params.method == "mailto":
        return MailtoDelivery()
    if params.method == "stdout":
        return StdoutDelivery()
    raise ValueError(f"Unknown notification method: {params.method}")


class LoadBoardService:
    """User-facing operations over a load store."""

    def __init__(
        self,
        store: LoadStore,
        route_distance: Optional[RouteDistance] = None,
        delivery: Optional[BaseNotificationDelivery] = None,
        notification_params: Optional[NotificationParams] = None
    ):
        self.store = store
        self.route = route_distance or RouteDistance()
        self.delivery = delivery
        self.notification_params = notification_params or NotificationParams()

    @classmethod
    def create(
        cls,
        config_dir: Optional[Path] = None,
        overrides: Optional[dict[str, Any]] = None,
        gateway: Optional[PersistenceGateway] = None,
        delivery: Optional[BaseNotificationDelivery] = None
    ) -> "LoadBoardService":
        """
        Build a fully wired service from configuration.

        Args:
            config_dir: Directory holding loadboard.yaml (optional)
            overrides: Highest-priority configuration values
            gateway: Use this gateway instead of the configured backend
            delivery: Use this delivery instead of the configured method

        Raises:
            ValueError: If the merged configuration is invalid
        """
        loader = ConfigLoader.create(config_dir)
        merged = loader.merge_config(overrides)

        issues = ConfigValidator.validate_config(merged)
        if issues:
            details = "; ".join(f"{issue.field}: {issue.message}" for issue in issues)
            raise ValueError(f"Invalid configuration: {details}")

        config: DefaultConfig = loader.from_dict(merged)
        configure_logging(
            level=config.logging.level,
            format_json=config.logging.format_json,
            include_caller=config.logging.include_caller,
            subsystem_levels=config.logging.subsystem_levels
        )

        gateway = gateway or build_gateway(config.persistence)

        notifier = None
        if config.notifications.enabled:
            delivery = delivery or build_delivery(config.notifications)
            notifier = NewLoadNotifier(
                delivery,
                broker_email=config.notifications.broker_email,
                company_name=config.notifications.company_name
            )

        store = LoadStore(gateway, params=config.store, notifier=notifier)
        route = RouteDistance(earth_radius_miles=config.geo.earth_radius_miles)

        logger.info(
            "Load board service created",
            backend=gateway.name,
            notifications=config.notifications.enabled
        )
        return cls(store, route, delivery, config.notifications)

    def list_loads(self, order: Optional[str] = None) -> list[Load]:
        return self.store.list_loads(order)

    def get_load(self, load_id: str) -> Optional[Load]:
        return self.store.state.find_load(load_id)

    def post_load(self, draft: LoadDraft) -> OperationResult[Load]:
        try:
            load = self.store.post_load(draft)
        except ValidationError as e:
            return OperationResult.failed(str(e))
        except PersistenceError:
            return OperationResult.failed("Failed to post load.")
        return OperationResult.ok("Load posted.", load)

    def update_load(self, load: Load) -> OperationResult[Load]:
        try:
            updated = self.store.update_load(load)
        except ValidationError as e:
            return OperationResult.failed(str(e))
        except NotFoundError:
            return OperationResult.failed(LOAD_NOT_FOUND_MESSAGE)
        except PersistenceError:
            return OperationResult.failed("Failed to update load.")
        return OperationResult.ok("Load updated.", updated)

    def remove_load(self, load_id: str) -> OperationResult[None]:
        try:
            self.store.remove_load(load_id)
        except NotFoundError:
            return OperationResult.failed(LOAD_NOT_FOUND_MESSAGE)
        except PersistenceError:
            return OperationResult.failed("Failed to remove load.")
        return OperationResult.ok("Load removed.")

    def add_bid(
        self,
        load_id: str,
        carrier_name: str,
        amount: float,
        carrier_email: Optional[str] = None,
        transit_days: Optional[int] = None
    ) -> OperationResult[Bid]:
        try:
            bid = self.store.add_bid(load_id, carrier_name, amount, carrier_email, transit_days)
        except ValidationError as e:
            return OperationResult.failed(str(e))
        except NotFoundError:
            return OperationResult.failed(LOAD_NOT_FOUND_MESSAGE)
        except PersistenceError:
            return OperationResult.failed("Failed to place bid.")
        return OperationResult.ok("Bid placed.", bid)

    def subscribe_carrier_email(self, email: str) -> OperationResult[str]:
        try:
            stored = self.store.subscribe_carrier_email(email)
        except ValidationError as e:
            # Covers DuplicateSubscriptionError
            return OperationResult.failed(str(e))
        except PersistenceError:
            return OperationResult.failed("An error occurred. Please try again.")
        return OperationResult.ok("You have been successfully subscribed!", stored)

    def send_bid_email(
        self,
        load_id: str,
        carrier_name: str,
        amount: float,
        transit_days: int
    ) -> OperationResult[DeliveryResult]:
        """
        Compose a bid email to the broker and hand it to the mail client.

        Nothing is stored; the broker records accepted bids separately.
        """
        try:
            self.store.validator.validate_bid(carrier_name, amount, transit_days)
            if transit_days is None:
                raise ValidationError("Please enter a valid number of transit days.",
                                      field="transit_days", value=transit_days)
            load = self.store.get_load(load_id)
        except ValidationError as e:
            return OperationResult.failed(str(e))
        except NotFoundError:
            return OperationResult.failed(LOAD_NOT_FOUND_MESSAGE)

        if self.delivery is None:
            return OperationResult.failed("Email delivery is not configured.")

        draft = compose_bid_draft(
            load, carrier_name, amount, transit_days, self.notification_params.broker_email
        )
        result = self.delivery.send(draft)
        if not result.delivered:
            return OperationResult.failed(result.message or "Could not open your email client.")
        return OperationResult.ok("Bid email prepared.", result)

    def route_distance(self, load_id: str) -> Optional[float]:
        """
        Total route miles for a load, None when any stop cannot be located.

        Raises:
            NotFoundError: If no load has this id
        """
        load = self.store.get_load(load_id)
        return self.route.total_distance(load.origin, load.destinations)
