"""Default configuration parameters for the load board."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class StoreParams:
    """Load store behaviour."""
    max_destinations: int = 3                        # Stops per load, 1..3
    strict_remove: bool = False                      # Raise NotFoundError when removing an unknown id
    list_order: str = "posted"                       # posted | pickup_desc
    load_id_prefix: str = "load"
    bid_id_prefix: str = "bid"


@dataclass(frozen=True)
class GeoParams:
    """Route distance parameters."""
    earth_radius_miles: float = 3959.0


@dataclass(frozen=True)
class PersistenceParams:
    """Persistence gateway selection and settings."""
    backend: str = "file"                            # memory | file | sqlite | http
    path: str = "loadboard.json"                     # File or SQLite database path
    url: Optional[str] = None                        # HTTP JSON store endpoint
    timeout_seconds: int = 10
    seed_on_empty: bool = True                       # Write defaults back when the store is empty


@dataclass(frozen=True)
class NotificationParams:
    """New load notification settings."""
    enabled: bool = True
    method: str = "mailto"                           # mailto | stdout
    broker_email: str = "dispatch@loadboard.example"
    company_name: str = "Load Board Dispatch"


@dataclass(frozen=True)
class LoggingParams:
    """Logging output settings."""
    level: str = "INFO"
    format_json: bool = False
    include_caller: bool = False
    subsystem_levels: dict[str, str] = field(default_factory=dict)  # Logger name prefix to level


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    store: StoreParams
    geo: GeoParams
    persistence: PersistenceParams
    notifications: NotificationParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        store=StoreParams(),
        geo=GeoParams(),
        persistence=PersistenceParams(),
        notifications=NotificationParams(),
        logging=LoggingParams(),
    )
