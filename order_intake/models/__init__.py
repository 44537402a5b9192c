"""Domain models for the warehouse change / allocation order intake.

This package contains the value objects passed between the extractor, the
intake filter, the line validator and the request builder.
"""

from .intake_result import BatchResult, FileStat, IntakeResult
from .observation_record import ObservationRecord
from .order_line import BLOCK_FLAG_FIELDS, OrderLine, RawLine
from .request import (
    HistoryEntry,
    LineSummary,
    Priority,
    Request,
    RequestStatus,
    SuggestedAction,
)
from .validated_line import ValidatedLine

__all__ = [
    # Line models
    "RawLine",
    "OrderLine",
    "ValidatedLine",
    "BLOCK_FLAG_FIELDS",
    # Request models
    "Request",
    "LineSummary",
    "HistoryEntry",
    "RequestStatus",
    "Priority",
    "SuggestedAction",
    # Results
    "IntakeResult",
    "FileStat",
    "BatchResult",
    "ObservationRecord",
]
