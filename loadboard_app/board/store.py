"""The load store: validated, optimistically persisted load board mutations."""

import uuid
from typing import Any, Callable, Optional

from ..config.defaults import StoreParams
from ..data.models import AppState, Bid, Load, LoadDraft
from ..data.validators import LoadValidator
from ..delivery.notifier import NewLoadNotifier
from ..errors import (
    DuplicateSubscriptionError,
    LoadBoardRequestError,
    NotFoundError,
    PersistenceError,
)
from ..logging.config import get_store_logger, log_store_mutation
from ..persistence.gateway import PersistenceGateway
from ..utils.time import utc_now
from .transaction import OptimisticTransaction

LIST_ORDERS = ("posted", "pickup_desc")
_MAX_ID_ATTEMPTS = 100


def _uuid_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


class LoadStore:
    """
    Owns the load board state and every mutation of it.

    All inputs are validated before anything changes. Each mutation is
    applied in memory, then saved through the gateway; a failed save
    restores the previous state and raises PersistenceError.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        params: Optional[StoreParams] = None,
        notifier: Optional[NewLoadNotifier] = None,
        id_factory: Optional[Callable[[str], str]] = None,
        clock: Optional[Callable] = None
    ):
        self.params = params or StoreParams()
        if self.params.list_order not in LIST_ORDERS:
            raise ValueError(f"Unknown list order: {self.params.list_order}")

        self.gateway = gateway
        self.validator = LoadValidator(self.params.max_destinations)
        self.transaction = OptimisticTransaction(gateway)
        self.notifier = notifier
        self._id_factory = id_factory or _uuid_id
        self._clock = clock or utc_now
        self.logger = get_store_logger(__name__)

    @property
    def state(self) -> AppState:
        return self.transaction.state

    def reload(self) -> AppState:
        """Re-read the state from the gateway."""
        return self.transaction.reload()

    def list_loads(self, order: Optional[str] = None) -> list[Load]:
        """
        Loads for display.

        "posted" is newest first, the order loads are kept in. "pickup_desc"
        sorts by pickup date, latest first; ties keep their posted order.
        """
        order = order or self.params.list_order
        loads = list(self.state.loads)
        if order == "posted":
            return loads
        if order == "pickup_desc":
            return sorted(loads, key=lambda load: load.pickup_date, reverse=True)
        raise ValueError(f"Unknown list order: {order}")

    def get_load(self, load_id: str) -> Load:
        load = self.state.find_load(load_id)
        if load is None:
            raise NotFoundError(f"Load not found: {load_id}", load_id=load_id)
        return load

    @property
    def carrier_emails(self) -> tuple[str, ...]:
        return self.state.carrier_emails

    def post_load(self, draft: LoadDraft) -> Load:
        """
        Publish a new load at the top of the board.

        Subscribers are notified after the load is saved; a notification
        failure is logged and does not undo the post.

        Raises:
            ValidationError: If the draft is invalid; nothing is changed
            PersistenceError: If the save failed; the post is undone
        """
        draft = self._validate("post_load", None, self.validator.validate_draft, draft)

        def mutate(current: AppState) -> tuple[AppState, Load]:
            load_id = self._new_id(self.params.load_id_prefix, current.load_ids)
            load = Load.from_draft(load_id, draft)
            return current.with_loads((load,) + current.loads), load

        load = self._commit("post_load", None, mutate)
        self._notify(load)
        return load

    def update_load(self, load: Load) -> Load:
        """
        Replace a load's fields, keeping its id and bids.

        Raises:
            ValidationError: If the new fields are invalid
            NotFoundError: If no load has this id
            PersistenceError: If the save failed; the edit is undone
        """
        draft = self._validate("update_load", load.id, self.validator.validate_draft, load.to_draft())

        def mutate(current: AppState) -> tuple[AppState, Load]:
            existing = current.find_load(load.id)
            if existing is None:
                raise NotFoundError(f"Load not found: {load.id}", load_id=load.id)
            updated = existing.with_draft(draft)
            loads = tuple(updated if item.id == load.id else item for item in current.loads)
            return current.with_loads(loads), updated

        return self._commit("update_load", load.id, mutate)

    def remove_load(self, load_id: str) -> None:
        """
        Remove a load and its bids.

        Removing an id that is not on the board succeeds without change
        unless strict_remove is configured.

        Raises:
            NotFoundError: Unknown id with strict_remove enabled
            PersistenceError: If the save failed; the load is restored
        """
        def mutate(current: AppState) -> tuple[AppState, None]:
            if current.find_load(load_id) is None:
                if self.params.strict_remove:
                    raise NotFoundError(f"Load not found: {load_id}", load_id=load_id)
                return current, None
            return current.with_loads(load for load in current.loads if load.id != load_id), None

        self._commit("remove_load", load_id, mutate)

    def add_bid(
        self,
        load_id: str,
        carrier_name: str,
        amount: float,
        carrier_email: Optional[str] = None,
        transit_days: Optional[int] = None
    ) -> Bid:
        """
        Append a carrier bid to a load.

        Raises:
            ValidationError: Blank carrier name or non-positive amount
            NotFoundError: If no load has this id
            PersistenceError: If the save failed; the bid is dropped
        """
        self._validate(
            "add_bid", load_id, self.validator.validate_bid,
            carrier_name, amount, transit_days, carrier_email
        )

        def mutate(current: AppState) -> tuple[AppState, Bid]:
            load = current.find_load(load_id)
            if load is None:
                raise NotFoundError(f"Load not found: {load_id}", load_id=load_id)

            bid = Bid(
                id=self._new_id(self.params.bid_id_prefix, {b.id for b in load.bids}),
                carrier_name=carrier_name.strip(),
                amount=float(amount),
                timestamp=self._clock(),
                carrier_email=carrier_email,
                transit_days=transit_days,
            )
            updated = load.with_bid(bid)
            loads = tuple(updated if item.id == load_id else item for item in current.loads)
            return current.with_loads(loads), bid

        return self._commit("add_bid", load_id, mutate)

    def subscribe_carrier_email(self, email: str) -> str:
        """
        Add an address to the new-load notification list.

        Duplicates are detected case-insensitively; the first casing stored
        is kept.

        Raises:
            ValidationError: Invalid address syntax
            DuplicateSubscriptionError: Address already subscribed
            PersistenceError: If the save failed; the address is dropped
        """
        self._validate("subscribe_carrier_email", None, self.validator.validate_email, email)

        def mutate(current: AppState) -> tuple[AppState, str]:
            lowered = email.lower()
            if any(existing.lower() == lowered for existing in current.carrier_emails):
                raise DuplicateSubscriptionError("This email is already subscribed.", email=email)
            return current.with_carrier_emails(current.carrier_emails + (email,)), email

        return self._commit("subscribe_carrier_email", None, mutate)

    def _validate(self, operation: str, load_id: Optional[str], check: Callable, *args: Any):
        try:
            return check(*args)
        except LoadBoardRequestError as e:
            log_store_mutation(self.logger, operation, "rejected", load_id, {"error": str(e)})
            raise

    def _commit(self, operation: str, load_id: Optional[str], mutate: Callable):
        try:
            result = self.transaction.run(mutate, operation)
        except LoadBoardRequestError as e:
            log_store_mutation(self.logger, operation, "rejected", load_id, {"error": str(e)})
            raise
        except PersistenceError as e:
            log_store_mutation(self.logger, operation, "rolled_back", load_id, {"error": str(e)})
            raise

        if isinstance(result, Load):
            load_id = result.id
        log_store_mutation(self.logger, operation, "committed", load_id)
        return result

    def _new_id(self, prefix: str, taken: set[str]) -> str:
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory(prefix)
            if candidate not in taken:
                return candidate
        raise RuntimeError(f"Could not generate a unique {prefix} id")

    def _notify(self, load: Load) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.notify(load, self.state.carrier_emails)
        except Exception as e:
            self.logger.warning(
                "New load notification failed",
                load_id=load.id,
                error=str(e)
            )
