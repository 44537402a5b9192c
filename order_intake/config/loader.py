from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader for the order intake pipeline.

Responsibilities:
- Load YAML config (config/intake.yml by default)
- Validate keys against contracts/config_schema.json
- Apply defaults for every key that is not set

Every key is optional; a run without any config file uses IntakeConfig()
which carries the business codes of the SAP allocation workflow.
"""

__all__ = [
    "ConfigError",
    "IntakeConfig",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/intake.yml")

# order_intake/config/loader.py -> order_intake/contracts
SCHEMA_PATH = Path(__file__).resolve().parent.parent / "contracts" / "config_schema.json"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class IntakeConfig:
    """Business codes and thresholds used by the filter, validator and builder."""
    required_item_category: str = "ZTAN"
    allowed_storage_locations: frozenset[str] = frozenset({"PT11", "PT15", "1000"})
    allocation_only_location: str = "PT11"  # Never opens an approval ticket
    approval_required_location: str = "PT15"  # Approval ticket + allocation ticket
    country: str = "Chile"
    sla_hours: int = 2
    emergency_cutoff: str = "11:00"  # Daily emergency up to and including this time
    timezone: str = "America/Santiago"
    max_observation_examples: int = 3

    @property
    def cutoff(self) -> tuple[int, int]:
        hour, minute = self.emergency_cutoff.split(":")
        return int(hour), int(minute)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the config
            data fails schema validation (unknown keys, wrong types, bad formats).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path | None = None) -> IntakeConfig:
    """Load the intake configuration.

    Args:
        path: Explicit config file. When None, DEFAULT_CONFIG_PATH is used if it
            exists, otherwise the built-in defaults are returned.

    Raises:
        ConfigError: If an explicitly given file does not exist, the YAML is
            invalid or the content fails schema validation.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return IntakeConfig()
        path = DEFAULT_CONFIG_PATH
    elif not path.exists():
        raise ConfigError(f"config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = IntakeConfig()
    storage = data.get("allowed_storage_locations")
    return IntakeConfig(
        required_item_category=data.get("required_item_category", defaults.required_item_category),
        allowed_storage_locations=(
            frozenset(s.strip() for s in storage) if storage else defaults.allowed_storage_locations
        ),
        allocation_only_location=data.get("allocation_only_location", defaults.allocation_only_location),
        approval_required_location=data.get("approval_required_location", defaults.approval_required_location),
        country=data.get("country", defaults.country),
        sla_hours=data.get("sla_hours", defaults.sla_hours),
        emergency_cutoff=data.get("emergency_cutoff", defaults.emergency_cutoff),
        timezone=data.get("timezone", defaults.timezone),
        max_observation_examples=data.get("max_observation_examples", defaults.max_observation_examples),
    )
