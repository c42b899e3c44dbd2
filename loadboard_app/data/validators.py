"""
Input validation for load board mutations.

Every check here runs before the store mutates its state, so a rejected
request never reaches the persistence gateway.
"""

import math
import re
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Optional

from ..errors import ValidationError
from .models import MAX_DESTINATIONS, EquipmentType, LoadDraft

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
APPOINTMENT_TIME_PATTERN = re.compile(r"([01]?\d|2[0-3]):[0-5]\d")


def is_valid_email(email: Any) -> bool:
    """One "@", non-empty local part, and a dotted domain; no whitespace."""
    return isinstance(email, str) and EMAIL_PATTERN.fullmatch(email) is not None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


class LoadValidator:
    """Validates load drafts, bids and subscriber emails."""

    def __init__(self, max_destinations: int = MAX_DESTINATIONS):
        """
        Initialize validator.

        Args:
            max_destinations: Upper bound on stops per load, at most 3
        """
        if not 1 <= max_destinations <= MAX_DESTINATIONS:
            raise ValueError(f"max_destinations must be between 1 and {MAX_DESTINATIONS}")
        self.max_destinations = max_destinations

    def validate_draft(self, draft: LoadDraft) -> LoadDraft:
        """
        Validate a load draft against the load invariants.

        Args:
            draft: Administrator-supplied load fields

        Returns:
            The draft with its equipment type coerced to EquipmentType

        Raises:
            ValidationError: If any field violates the load invariants
        """
        self._validate_descriptions(draft)
        self._validate_route(draft)
        self._validate_dates(draft)
        self._validate_quantities(draft)
        equipment_type = self._validate_equipment(draft.equipment_type)
        self._validate_text_fields(draft)

        return replace(draft, equipment_type=equipment_type)

    def validate_bid(
        self,
        carrier_name: Any,
        amount: Any,
        transit_days: Any = None,
        carrier_email: Any = None
    ) -> None:
        """
        Validate a bid submission.

        Raises:
            ValidationError: If the carrier name is blank, the amount is not a
                positive number, or the optional fields are malformed
        """
        if _is_blank(carrier_name):
            raise ValidationError("Please enter your company name.",
                                  field="carrier_name", value=carrier_name)

        if not _is_number(amount) or not math.isfinite(amount) or amount <= 0:
            raise ValidationError("Please enter a valid bid amount.",
                                  field="amount", value=amount)

        if transit_days is not None:
            if not isinstance(transit_days, int) or isinstance(transit_days, bool) or transit_days <= 0:
                raise ValidationError("Please enter a valid number of transit days.",
                                      field="transit_days", value=transit_days)

        if carrier_email is not None and not is_valid_email(carrier_email):
            raise ValidationError("Please enter a valid email address.",
                                  field="carrier_email", value=carrier_email)

    def validate_email(self, email: Any) -> None:
        """
        Validate subscriber email syntax.

        Raises:
            ValidationError: If the address is not syntactically valid
        """
        if not is_valid_email(email):
            raise ValidationError("Please enter a valid email address.",
                                  field="email", value=email)

    def _validate_descriptions(self, draft: LoadDraft) -> None:
        descriptions = draft.item_descriptions
        if not isinstance(descriptions, tuple) or not descriptions:
            raise ValidationError("At least one item description is required",
                                  field="item_descriptions", value=descriptions)
        for description in descriptions:
            if _is_blank(description):
                raise ValidationError("Item descriptions must be non-empty text",
                                      field="item_descriptions", value=descriptions)

    def _validate_route(self, draft: LoadDraft) -> None:
        if _is_blank(draft.origin):
            raise ValidationError("Origin is required", field="origin", value=draft.origin)

        destinations = draft.destinations
        if not isinstance(destinations, tuple) or not destinations:
            raise ValidationError("At least one destination is required",
                                  field="destinations", value=destinations)
        if len(destinations) > self.max_destinations:
            raise ValidationError(
                f"A load may have at most {self.max_destinations} destinations",
                field="destinations", value=destinations
            )
        for destination in destinations:
            if _is_blank(destination):
                raise ValidationError("Destinations must be non-empty text",
                                      field="destinations", value=destinations)

        refs = draft.destination_refs
        if refs is not None:
            if not isinstance(refs, tuple) or not all(isinstance(ref, str) for ref in refs):
                raise ValidationError("Destination references must be text",
                                      field="destination_refs", value=refs)
            if len(refs) != len(destinations):
                raise ValidationError(
                    "Destination references must align with destinations",
                    field="destination_refs", value=refs
                )

    def _validate_dates(self, draft: LoadDraft) -> None:
        for field_name in ("pickup_date", "delivery_date"):
            value = getattr(draft, field_name)
            if not self._is_calendar_date(value):
                raise ValidationError(f"{field_name} must be a calendar date",
                                      field=field_name, value=value)

        if draft.appointment_date is not None and not self._is_calendar_date(draft.appointment_date):
            raise ValidationError("appointment_date must be a calendar date",
                                  field="appointment_date", value=draft.appointment_date)

        time_value = draft.appointment_time
        if time_value is not None:
            if not isinstance(time_value, str) or not APPOINTMENT_TIME_PATTERN.fullmatch(time_value):
                raise ValidationError("appointment_time must be HH:MM",
                                      field="appointment_time", value=time_value)

    def _validate_quantities(self, draft: LoadDraft) -> None:
        for field_name in ("pallet_count", "weight"):
            value = getattr(draft, field_name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValidationError(f"{field_name} must be a non-negative integer",
                                      field=field_name, value=value)

    def _validate_equipment(self, value: Any) -> EquipmentType:
        try:
            return EquipmentType(value)
        except ValueError:
            raise ValidationError(f"Unknown equipment type: {value}",
                                  field="equipment_type", value=value) from None

    def _validate_text_fields(self, draft: LoadDraft) -> None:
        if not isinstance(draft.details, str):
            raise ValidationError("details must be text", field="details", value=draft.details)

        for field_name in ("reference_number", "appointment_number"):
            value: Optional[Any] = getattr(draft, field_name)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{field_name} must be text",
                                      field=field_name, value=value)

    @staticmethod
    def _is_calendar_date(value: Any) -> bool:
        return isinstance(value, date) and not isinstance(value, datetime)
