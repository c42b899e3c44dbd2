"""
Utility functions module.

Common helpers shared across the load board.

Time Semantics:
- Bid timestamps are wall-clock instants stored in UTC
- Pickup, delivery and appointment dates are calendar dates with no time zone
- Wire formats are ISO-8601; bid timestamps carry a trailing "Z"
"""
