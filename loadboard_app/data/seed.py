"""Seed data written to an empty or unreadable store."""

from datetime import date, datetime, timezone

from .models import AppState, Bid, EquipmentType, Load

DEFAULT_CARRIER_EMAILS = (
    "carrier1@example.com",
    "dispatch@abcfreight.com",
    "bids@quicktransport.net",
    "contact@reliablehaulers.com",
    "freight@crosstownmovers.org",
)


def _bid(bid_id: str, carrier_name: str, amount: float, timestamp: str) -> Bid:
    return Bid(
        id=bid_id,
        carrier_name=carrier_name,
        amount=float(amount),
        timestamp=datetime.fromisoformat(timestamp).replace(tzinfo=timezone.utc),
    )


def default_loads() -> tuple[Load, ...]:
    """Sample loads shown on a fresh board."""
    return (
        Load(
            id="load-1",
            item_descriptions=("Palm Beach Illustrated",),
            reference_number="TR-PBI-001",
            origin="New York, NY",
            destinations=("Los Angeles, CA",),
            pickup_date=date(2024, 8, 1),
            delivery_date=date(2024, 8, 7),
            pallet_count=26,
            weight=40000,
            equipment_type=EquipmentType.DRY_VAN_53,
            details='Full truckload of "Palm Beach Illustrated" magazines. Pickup by 5 PM.',
            bids=(
                _bid("bid-101", "Cross Country Movers", 4500, "2024-07-20T10:00:00"),
                _bid("bid-102", "Reliable Transport", 4650, "2024-07-20T11:30:00"),
            ),
        ),
        Load(
            id="load-2",
            item_descriptions=("Tallahassee Magazine",),
            reference_number="TR-TMAG-005",
            origin="Chicago, IL",
            destinations=("Dallas, TX",),
            pickup_date=date(2024, 8, 3),
            delivery_date=date(2024, 8, 5),
            pallet_count=12,
            weight=20000,
            equipment_type=EquipmentType.BOX_TRUCK_26,
            details='Partial truckload of "Tallahassee Magazine". Requires liftgate service at delivery.',
            bids=(
                _bid("bid-201", "Midwest Haulers", 1200, "2024-07-21T09:00:00"),
            ),
        ),
        Load(
            id="load-3",
            item_descriptions=("Aventura",),
            reference_number="TR-AVM-002",
            origin="Atlanta, GA",
            destinations=("Miami, FL",),
            pickup_date=date(2024, 8, 2),
            delivery_date=date(2024, 8, 3),
            pallet_count=18,
            weight=24000,
            equipment_type=EquipmentType.DRY_VAN_53,
            details=('Time-sensitive delivery of "Aventura" magazine for a launch event. '
                     'Must deliver by 9 AM. Delivery appt. is sharp.'),
            appointment_date=date(2024, 8, 3),
            appointment_time="08:30",
            appointment_number="MI-12345",
            bids=(
                _bid("bid-301", "Sunshine Express", 950, "2024-07-22T14:00:00"),
                _bid("bid-302", "Quick Route Logistics", 925, "2024-07-22T15:10:00"),
                _bid("bid-303", "Florida Freight", 940, "2024-07-22T16:00:00"),
            ),
        ),
        Load(
            id="load-4",
            item_descriptions=("Emerald Coast Magazine",),
            reference_number="TR-ECM-009",
            origin="Denver, CO",
            destinations=("Seattle, WA",),
            pickup_date=date(2024, 8, 5),
            delivery_date=date(2024, 8, 8),
            pallet_count=24,
            weight=38000,
            equipment_type=EquipmentType.FULL_TRUCK_DEDICATED,
            details=('Full truckload of "Emerald Coast Magazine". '
                     'Reefer not required, but trailer must be clean and dry.'),
        ),
        Load(
            id="load-5",
            item_descriptions=("850 Business Magazine",),
            reference_number="TR-850B-001",
            origin="Boston, MA",
            destinations=("Philadelphia, PA",),
            pickup_date=date(2024, 8, 1),
            delivery_date=date(2024, 8, 1),
            pallet_count=8,
            weight=12000,
            equipment_type=EquipmentType.SPRINTER_VAN,
            details='Expedited, same-day delivery of special edition "850 Business Magazine".',
            bids=(
                _bid("bid-501", "East Coast Couriers", 600, "2024-07-23T08:00:00"),
            ),
        ),
        Load(
            id="load-6",
            item_descriptions=("Naples Illustrated",),
            reference_number="TR-NPI-011",
            origin="Philadelphia, PA",
            destinations=("Richmond, VA",),
            pickup_date=date(2024, 8, 6),
            delivery_date=date(2024, 8, 7),
            pallet_count=4,
            weight=5000,
            equipment_type=EquipmentType.LTL,
            details=('Small shipment of "Naples Illustrated" magazine. '
                     'Delivery to a shared warehouse, check in at front desk.'),
        ),
    )


def default_app_state() -> AppState:
    """Fresh application state used when the store is empty or unreadable."""
    return AppState(loads=default_loads(), carrier_emails=DEFAULT_CARRIER_EMAILS)
