from .init import log_summary, reset_logging, set_debug, setup_logging

__all__ = [
    "setup_logging",
    "set_debug",
    "log_summary",
    "reset_logging",
]
