from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest
import yaml

from order_intake.config.loader import SCHEMA_PATH

"""Config schema contract: the shipped sample config is valid."""

CONFIG_SCHEMA = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
SAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "intake.yml"


def test_sample_config_is_valid():
    data = yaml.safe_load(SAMPLE_CONFIG.read_text(encoding="utf-8"))
    jsonschema.validate(data, CONFIG_SCHEMA)


def test_empty_config_is_valid():
    jsonschema.validate({}, CONFIG_SCHEMA)


def test_schema_rejects_duplicate_storage_codes():
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate({"allowed_storage_locations": ["PT11", "PT11"]}, CONFIG_SCHEMA)
