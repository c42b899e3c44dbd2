"""
Parsing of stored application state documents.

Whatever a gateway reads back (JSON text, a decoded dict, or garbage) goes
through a fallible parse step that returns a tagged result instead of
trusting the payload's shape.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

import structlog

from ..errors import ValidationError
from .models import AppState, Load
from .validators import LoadValidator

logger = structlog.get_logger(__name__)

_validator = LoadValidator()


@dataclass
class AppStateParseResult:
    """Result of parsing a stored application state document."""
    # Parsed state (None if invalid)
    state: Optional[AppState] = None
    # Processing metadata
    success: bool = True
    error_msg: Optional[str] = None
    skipped_loads: int = 0

    @classmethod
    def valid(cls, state: AppState, skipped_loads: int = 0) -> "AppStateParseResult":
        """Create successful result with parsed state."""
        return cls(
            state=state,
            success=True,
            skipped_loads=skipped_loads
        )

    @classmethod
    def invalid(cls, error_msg: str) -> "AppStateParseResult":
        """Create error result."""
        return cls(
            success=False,
            error_msg=error_msg
        )


def parse_app_state(payload: Any) -> AppStateParseResult:
    """
    Parse a stored application state document.

    The document must be an object whose "loads" and "carrierEmails" are
    arrays. Individual loads that fail to parse, or that break the rules a
    newly posted load must satisfy, are skipped with a warning
    rather than invalidating the whole document, and non-string subscriber
    entries are dropped.

    Args:
        payload: JSON text, bytes, or an already decoded object

    Returns:
        AppStateParseResult tagged valid or invalid
    """
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            return AppStateParseResult.invalid(f"Undecodable payload: {e}")

    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            return AppStateParseResult.invalid(f"Invalid JSON: {e}")

    if not isinstance(payload, dict):
        return AppStateParseResult.invalid(
            f"Expected an object, got {type(payload).__name__}"
        )

    raw_loads = payload.get("loads")
    raw_emails = payload.get("carrierEmails")
    if not isinstance(raw_loads, list) or not isinstance(raw_emails, list):
        return AppStateParseResult.invalid("loads and carrierEmails must be arrays")

    loads = []
    seen_ids = set()
    skipped = 0
    for index, raw_load in enumerate(raw_loads):
        try:
            if not isinstance(raw_load, dict):
                raise ValueError("load entry is not an object")
            load = Load.from_dict(raw_load)
            if load.id in seen_ids:
                raise ValueError(f"duplicate load id {load.id}")
            _check_stored_load(load)
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            skipped += 1
            logger.warning(
                "Skipping malformed stored load",
                index=index,
                error=str(e)
            )
            continue

        seen_ids.add(load.id)
        loads.append(load)

    emails = [email for email in raw_emails if isinstance(email, str)]
    if len(emails) != len(raw_emails):
        logger.warning(
            "Dropped non-string subscriber entries",
            dropped=len(raw_emails) - len(emails)
        )

    return AppStateParseResult.valid(
        AppState(loads=tuple(loads), carrier_emails=tuple(emails)),
        skipped_loads=skipped
    )


def _check_stored_load(load: Load) -> None:
    """
    Apply the same rules to a stored load as to a newly posted one.

    Raises:
        ValidationError: If the load or any of its bids breaks them
    """
    _validator.validate_draft(load.to_draft())
    for bid in load.bids:
        _validator.validate_bid(bid.carrier_name, bid.amount, bid.transit_days, bid.carrier_email)

def serialize_app_state(state: AppState) -> str:
    """Serialize the whole state document to JSON text."""
    return json.dumps(state.to_dict(), indent=2)
