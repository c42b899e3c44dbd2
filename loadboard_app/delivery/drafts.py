"""
Composition of notification and bid email drafts.

Drafts are plain data; delivery mechanisms decide how to hand them to the
user's mail client.
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence
from urllib.parse import quote

from ..data.models import EquipmentType, Load
from ..utils.time import format_display_date

_STREET_ADDRESS = re.compile(r"^\d")
_RULE = "-" * 50


@dataclass(frozen=True)
class MessageDraft:
    """An email ready to be opened in a mail client."""
    to: str
    subject: str
    body: str
    bcc: tuple[str, ...] = ()

    def to_mailto(self) -> str:
        """Render as a mailto: link with percent-encoded subject and body."""
        params = []
        if self.bcc:
            params.append(f"bcc={','.join(self.bcc)}")
        params.append(f"subject={quote(self.subject, safe='')}")
        params.append(f"body={quote(self.body, safe='')}")
        return f"mailto:{self.to}?{'&'.join(params)}"


def format_location(location: str) -> str:
    """
    Shorten a street address to "City, ST".

    "3487 South Preston Highway, Lebanon Junction, KY 40150" becomes
    "Lebanon Junction, KY". Anything not starting with a digit is assumed to
    already be "City, ST" and returned unchanged.
    """
    if not location:
        return ""
    if _STREET_ADDRESS.match(location):
        parts = location.split(",")
        if len(parts) >= 3:
            state = parts[2].strip().split(" ")[0]
            return f"{parts[1].strip()}, {state}"
    return location


def format_currency(amount: float) -> str:
    """US dollars, cents only when present: $1,850 or $1,850.50."""
    if float(amount).is_integer():
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"


def _destination_lines(load: Load) -> str:
    return "\n".join(
        f"Destination {index}: {destination}"
        for index, destination in enumerate(load.destinations, start=1)
    )


def _equipment_label(value) -> str:
    if isinstance(value, EquipmentType):
        return value.value
    return str(value)


def compose_new_load_notice(
    load: Load,
    recipients: Sequence[str],
    broker_email: str,
    company_name: str
) -> Optional[MessageDraft]:
    """
    Build the "new freight available" notice for subscribed carriers.

    The broker is the visible recipient and subscribers are BCC'd.

    Returns:
        The draft, or None when there is nobody to notify
    """
    if not recipients:
        return None

    drops = len(load.destinations) - 1
    subject = f"New Freight Available: {load.origin} to {load.destinations[0]}"
    if drops > 0:
        subject += f" (+{drops} drops)"

    body = "\n".join([
        "A new load has been posted and is available for bidding.",
        "",
        "Load Details:",
        _RULE,
        f"Item: {', '.join(load.item_descriptions)}",
        f"Reference #: {load.reference_number or 'N/A'}",
        f"Origin: {load.origin}",
        _destination_lines(load),
        f"Pickup Date: {format_display_date(load.pickup_date)}",
        f"Delivery Date: {format_display_date(load.delivery_date)}",
        f"Pallet Count: {load.pallet_count:,}",
        f"Weight: {load.weight:,} lbs",
        f"Equipment: {_equipment_label(load.equipment_type)}",
        _RULE,
        "Details:",
        load.details,
        _RULE,
        "To place your bid, please visit the loadboard.",
        "",
        "Thank you,",
        company_name,
    ])

    return MessageDraft(to=broker_email, subject=subject, body=body, bcc=tuple(recipients))


def compose_bid_draft(
    load: Load,
    carrier_name: str,
    amount: float,
    transit_days: Optional[int],
    broker_email: str
) -> MessageDraft:
    """Build the email a carrier sends the broker to place a bid."""
    subject = (
        f"Bid for Load #{load.reference_number or load.id}: "
        f"{format_location(load.origin)} to {format_location(load.destinations[0])}"
    )
    if load.is_multi_stop:
        subject += " (+ multi-stop)"

    body = "\n".join([
        f"We can move this shipment for Bid Amount: {format_currency(amount)}",
        f"Days In Transit: {transit_days if transit_days is not None else 'N/A'}",
        "",
        f"Reference #: {load.reference_number or 'N/A'}",
        f"Origin: {load.origin}",
        _destination_lines(load),
        f"Pickup Date: {format_display_date(load.pickup_date, long_month=False)}",
        f"Delivery Date: {format_display_date(load.delivery_date, long_month=False)}",
        f"Equipment: {_equipment_label(load.equipment_type)}",
        f"Pallet Count: {load.pallet_count}",
        f"Weight: {load.weight:,} lbs",
        f"Details: {load.details}",
        "",
        "Thank you,",
        carrier_name.strip(),
        "",
    ])

    return MessageDraft(to=broker_email, subject=subject, body=body)
