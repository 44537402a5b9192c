"""Warehouse change / allocation order intake.

Ingests SAP order line uploads, filters and validates each line, classifies it
into an operational recommendation and aggregates the valid lines into one
approval request.
"""

from .config.loader import IntakeConfig
from .excel.reader import UploadedFile, parse_order_file
from .models import IntakeResult, OrderLine, Request, ValidatedLine
from .services.orchestrator import simulate_rules

__all__ = [
    "IntakeConfig",
    "UploadedFile",
    "parse_order_file",
    "simulate_rules",
    "IntakeResult",
    "OrderLine",
    "Request",
    "ValidatedLine",
]

__version__ = "0.1.0"
