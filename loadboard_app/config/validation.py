"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..data.models import MAX_DESTINATIONS

KNOWN_BACKENDS = ("memory", "file", "sqlite", "http")
KNOWN_LIST_ORDERS = ("posted", "pickup_desc")
KNOWN_NOTIFICATION_METHODS = ("mailto", "stdout")
KNOWN_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ConfigIssue:
    """Represents a configuration validation problem."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_store_params(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate load store parameters."""
        errors = []

        if "max_destinations" in params:
            value = params["max_destinations"]
            if (not isinstance(value, int) or isinstance(value, bool)
                    or value < 1 or value > MAX_DESTINATIONS):
                errors.append(ConfigIssue(
                    field="store.max_destinations",
                    message=f"Must be an integer between 1 and {MAX_DESTINATIONS}",
                    value=value
                ))

        if "strict_remove" in params:
            value = params["strict_remove"]
            if not isinstance(value, bool):
                errors.append(ConfigIssue(
                    field="store.strict_remove",
                    message="Must be a boolean",
                    value=value
                ))

        if "list_order" in params:
            value = params["list_order"]
            if value not in KNOWN_LIST_ORDERS:
                errors.append(ConfigIssue(
                    field="store.list_order",
                    message=f"Must be one of {', '.join(KNOWN_LIST_ORDERS)}",
                    value=value
                ))

        for prefix_field in ("load_id_prefix", "bid_id_prefix"):
            if prefix_field in params:
                value = params[prefix_field]
                if not isinstance(value, str) or not value:
                    errors.append(ConfigIssue(
                        field=f"store.{prefix_field}",
                        message="Must be a non-empty string",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_geo_params(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate route distance parameters."""
        errors = []

        if "earth_radius_miles" in params:
            value = params["earth_radius_miles"]
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                errors.append(ConfigIssue(
                    field="geo.earth_radius_miles",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_persistence_params(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate persistence gateway parameters."""
        errors = []

        backend = params.get("backend")
        if "backend" in params and backend not in KNOWN_BACKENDS:
            errors.append(ConfigIssue(
                field="persistence.backend",
                message=f"Must be one of {', '.join(KNOWN_BACKENDS)}",
                value=backend
            ))

        if backend in ("file", "sqlite"):
            value = params.get("path")
            if not isinstance(value, str) or not value:
                errors.append(ConfigIssue(
                    field="persistence.path",
                    message=f"Required for the {backend} backend",
                    value=value
                ))

        if backend == "http":
            value = params.get("url")
            if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                errors.append(ConfigIssue(
                    field="persistence.url",
                    message="Required for the http backend and must be an http(s) URL",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                errors.append(ConfigIssue(
                    field="persistence.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "seed_on_empty" in params and not isinstance(params["seed_on_empty"], bool):
            errors.append(ConfigIssue(
                field="persistence.seed_on_empty",
                message="Must be a boolean",
                value=params["seed_on_empty"]
            ))

        return errors

    @staticmethod
    def validate_notification_params(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate notification parameters."""
        errors = []

        if "enabled" in params and not isinstance(params["enabled"], bool):
            errors.append(ConfigIssue(
                field="notifications.enabled",
                message="Must be a boolean",
                value=params["enabled"]
            ))

        if "method" in params and params["method"] not in KNOWN_NOTIFICATION_METHODS:
            errors.append(ConfigIssue(
                field="notifications.method",
                message=f"Must be one of {', '.join(KNOWN_NOTIFICATION_METHODS)}",
                value=params["method"]
            ))

        if "broker_email" in params:
            value = params["broker_email"]
            if not isinstance(value, str) or "@" not in value:
                errors.append(ConfigIssue(
                    field="notifications.broker_email",
                    message="Must be an email address",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in KNOWN_LOG_LEVELS:
                errors.append(ConfigIssue(
                    field="logging.level",
                    message=f"Must be one of {', '.join(KNOWN_LOG_LEVELS)}",
                    value=value
                ))

        levels = params.get("subsystem_levels", {})
        if not isinstance(levels, dict):
            errors.append(ConfigIssue(
                field="logging.subsystem_levels",
                message="Must be a mapping of logger prefix to level",
                value=levels
            ))
        else:
            for prefix, value in levels.items():
                if not isinstance(value, str) or value.upper() not in KNOWN_LOG_LEVELS:
                    errors.append(ConfigIssue(
                        field=f"logging.subsystem_levels.{prefix}",
                        message=f"Must be one of {', '.join(KNOWN_LOG_LEVELS)}",
                        value=value
                    ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ConfigIssue]:
        """Validate a merged configuration dictionary."""
        validators = {
            "store": cls.validate_store_params,
            "geo": cls.validate_geo_params,
            "persistence": cls.validate_persistence_params,
            "notifications": cls.validate_notification_params,
            "logging": cls.validate_logging_params,
        }

        errors = []
        for section, validator in validators.items():
            params = config.get(section, {})
            if not isinstance(params, dict):
                errors.append(ConfigIssue(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            errors.extend(validator(params))

        return errors
