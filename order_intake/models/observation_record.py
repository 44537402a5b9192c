from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ObservationRecord model for the observation log.

One record per excluded line or per global observation of an upload. The
JSON Lines shape is fixed by order_intake/contracts/observation_log_schema.json.
"""

__all__ = [
    "ObservationRecord",
]


@dataclass(frozen=True)
class ObservationRecord:
    """Structured observation for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Uploaded file name
        order_number: Sales order of the line, empty for upload-level observations
        line_item: Line item of the line, empty for upload-level observations
        rule: Rule classification in UPPER_SNAKE_CASE format
        message: Observation text as shown to the user
    """
    timestamp: str  # ISO8601 UTC
    file: str
    order_number: str
    line_item: str
    rule: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, order_number: str, line_item: str, rule: str, message: str) -> ObservationRecord:
        """Create a new ObservationRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ObservationRecord(
            timestamp=ts,
            file=file,
            order_number=order_number,
            line_item=line_item,
            rule=rule,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON Lines entry (no extra keys)."""
        return json.dumps(asdict(self), ensure_ascii=False)
