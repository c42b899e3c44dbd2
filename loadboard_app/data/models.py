"""
Canonical data models for the load board.

This module defines immutable data structures for loads, bids and the
aggregate application state, together with their mapping to the persisted
JSON document. Wire field names are camelCase and must stay stable so that
previously stored documents keep loading.
"""

from dataclasses import dataclass, fields, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from ..utils.time import format_date, format_timestamp, parse_date, parse_timestamp

MAX_DESTINATIONS = 3


class EquipmentType(str, Enum):
    """Trailer and service types a load can be posted for."""
    DRY_VAN_53 = "53ft Dry Van"
    BOX_TRUCK_26 = "26ft Box Truck"
    FULL_TRUCK_DEDICATED = "Full Truck Dedicated"
    SPRINTER_VAN = "Sprinter Van"
    FLATBED = "Flatbed"
    LTL = "LTL"


def _as_tuple(value: Any) -> Any:
    """Freeze list payloads so frozen models stay hashable and immutable."""
    if isinstance(value, list):
        return tuple(value)
    return value


def _require_int(data: dict[str, Any], key: str) -> int:
    value = data[key]
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise ValueError(f"{key} must be an integer")
    return value


def _require_str_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{key} must be a list of strings")
    return tuple(value)


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _optional_str(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


@dataclass(frozen=True)
class Bid:
    """A carrier's offer on a load. Immutable once created."""
    id: str
    carrier_name: str
    amount: float                                    # Currency units, > 0
    timestamp: datetime                              # Creation instant, UTC
    carrier_email: Optional[str] = None
    transit_days: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        """Wire representation."""
        data: dict[str, Any] = {
            "id": self.id,
            "carrierName": self.carrier_name,
            "amount": self.amount,
            "timestamp": format_timestamp(self.timestamp),
        }
        if self.carrier_email is not None:
            data["carrierEmail"] = self.carrier_email
        if self.transit_days is not None:
            data["daysInTransit"] = self.transit_days
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bid":
        """
        Build a bid from its wire representation.

        Raises:
            KeyError, TypeError, ValueError: If the payload is malformed
        """
        amount = data["amount"]
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise ValueError("amount must be a number")

        transit_days = data.get("daysInTransit")
        if transit_days is not None:
            transit_days = _require_int(data, "daysInTransit")

        return cls(
            id=str(data["id"]),
            carrier_name=str(data["carrierName"]),
            amount=float(amount),
            timestamp=parse_timestamp(data["timestamp"]),
            carrier_email=_optional_str(data, "carrierEmail"),
            transit_days=transit_days,
        )


@dataclass(frozen=True)
class LoadDraft:
    """Administrator-supplied load fields: everything except id and bids."""
    item_descriptions: tuple[str, ...]
    origin: str
    destinations: tuple[str, ...]
    pickup_date: date
    delivery_date: date
    pallet_count: int
    weight: int                                      # Pounds
    equipment_type: EquipmentType
    details: str = ""
    reference_number: Optional[str] = None
    destination_refs: Optional[tuple[str, ...]] = None   # Index-aligned with destinations
    appointment_date: Optional[date] = None
    appointment_time: Optional[str] = None           # "HH:MM", 24h
    appointment_number: Optional[str] = None

    def __post_init__(self):
        for name in ("item_descriptions", "destinations", "destination_refs"):
            object.__setattr__(self, name, _as_tuple(getattr(self, name)))


DRAFT_FIELDS = tuple(f.name for f in fields(LoadDraft))


@dataclass(frozen=True)
class Load:
    """A freight shipment listing open for carrier bidding."""
    id: str
    item_descriptions: tuple[str, ...]
    origin: str
    destinations: tuple[str, ...]
    pickup_date: date
    delivery_date: date
    pallet_count: int
    weight: int
    equipment_type: EquipmentType
    details: str = ""
    reference_number: Optional[str] = None
    destination_refs: Optional[tuple[str, ...]] = None
    appointment_date: Optional[date] = None
    appointment_time: Optional[str] = None
    appointment_number: Optional[str] = None
    bids: tuple[Bid, ...] = ()

    def __post_init__(self):
        for name in ("item_descriptions", "destinations", "destination_refs", "bids"):
            object.__setattr__(self, name, _as_tuple(getattr(self, name)))

    @classmethod
    def from_draft(cls, load_id: str, draft: LoadDraft) -> "Load":
        """Create a new load with no bids from a draft."""
        return cls(id=load_id, bids=(), **{name: getattr(draft, name) for name in DRAFT_FIELDS})

    def to_draft(self) -> LoadDraft:
        """Editable fields of this load."""
        return LoadDraft(**{name: getattr(self, name) for name in DRAFT_FIELDS})

    def with_draft(self, draft: LoadDraft) -> "Load":
        """Replace every field except id and bids."""
        return replace(self, **{name: getattr(draft, name) for name in DRAFT_FIELDS})

    def with_bid(self, bid: Bid) -> "Load":
        """Append a bid."""
        return replace(self, bids=self.bids + (bid,))

    @property
    def is_multi_stop(self) -> bool:
        return len(self.destinations) > 1

    def bids_by_amount(self) -> list[Bid]:
        """Bids ordered from lowest to highest amount."""
        return sorted(self.bids, key=lambda bid: bid.amount)

    def lowest_bid(self) -> Optional[Bid]:
        """Lowest bid, None if no bids."""
        if not self.bids:
            return None
        return min(self.bids, key=lambda bid: bid.amount)

    def to_dict(self) -> dict[str, Any]:
        """Wire representation."""
        data: dict[str, Any] = {
            "id": self.id,
            "itemDescriptions": list(self.item_descriptions),
            "origin": self.origin,
            "destinations": list(self.destinations),
            "pickupDate": format_date(self.pickup_date),
            "deliveryDate": format_date(self.delivery_date),
            "palletCount": self.pallet_count,
            "weight": self.weight,
            "equipmentType": EquipmentType(self.equipment_type).value,
            "details": self.details,
            "bids": [bid.to_dict() for bid in self.bids],
        }
        if self.reference_number is not None:
            data["referenceNumber"] = self.reference_number
        if self.destination_refs is not None:
            data["destinationRefs"] = list(self.destination_refs)
        if self.appointment_date is not None:
            data["appointmentDate"] = format_date(self.appointment_date)
        if self.appointment_time is not None:
            data["appointmentTime"] = self.appointment_time
        if self.appointment_number is not None:
            data["appointmentNumber"] = self.appointment_number
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Load":
        """
        Build a load from its wire representation.

        Older documents stored a single "itemDescription" string; it is read
        as a one-item description list.

        Raises:
            KeyError, TypeError, ValueError: If the payload is malformed
        """
        if "itemDescriptions" not in data and isinstance(data.get("itemDescription"), str):
            item_descriptions: tuple[str, ...] = (data["itemDescription"],)
        else:
            item_descriptions = _require_str_list(data, "itemDescriptions")

        destination_refs = None
        if data.get("destinationRefs") is not None:
            destination_refs = _require_str_list(data, "destinationRefs")

        appointment_date = None
        if data.get("appointmentDate"):
            appointment_date = parse_date(data["appointmentDate"])

        bids = data.get("bids", [])
        if not isinstance(bids, list):
            raise ValueError("bids must be a list")

        load_id = data["id"]
        if not isinstance(load_id, str) or not load_id:
            raise ValueError("id must be a non-empty string")

        details = data.get("details", "")
        if not isinstance(details, str):
            raise ValueError("details must be a string")

        return cls(
            id=load_id,
            item_descriptions=item_descriptions,
            origin=_require_str(data, "origin"),
            destinations=_require_str_list(data, "destinations"),
            pickup_date=parse_date(data["pickupDate"]),
            delivery_date=parse_date(data["deliveryDate"]),
            pallet_count=_require_int(data, "palletCount"),
            weight=_require_int(data, "weight"),
            equipment_type=EquipmentType(data["equipmentType"]),
            details=details,
            reference_number=_optional_str(data, "referenceNumber"),
            destination_refs=destination_refs,
            appointment_date=appointment_date,
            appointment_time=_optional_str(data, "appointmentTime"),
            appointment_number=_optional_str(data, "appointmentNumber"),
            bids=tuple(Bid.from_dict(bid) for bid in bids),
        )


@dataclass(frozen=True)
class AppState:
    """The persisted aggregate: all loads plus the notification subscriber list."""
    loads: tuple[Load, ...] = ()
    carrier_emails: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "loads", _as_tuple(self.loads))
        object.__setattr__(self, "carrier_emails", _as_tuple(self.carrier_emails))

    def find_load(self, load_id: str) -> Optional[Load]:
        """Load with the given id, None if absent."""
        for load in self.loads:
            if load.id == load_id:
                return load
        return None

    @property
    def load_ids(self) -> set[str]:
        return {load.id for load in self.loads}

    def with_loads(self, loads) -> "AppState":
        return replace(self, loads=tuple(loads))

    def with_carrier_emails(self, carrier_emails) -> "AppState":
        return replace(self, carrier_emails=tuple(carrier_emails))

    def to_dict(self) -> dict[str, Any]:
        """Wire representation of the whole document."""
        return {
            "loads": [load.to_dict() for load in self.loads],
            "carrierEmails": list(self.carrier_emails),
        }
