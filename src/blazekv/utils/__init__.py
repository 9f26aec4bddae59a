"""
Utility helpers shared across BlazeKV packages.
"""

from .logging import configure_logging, get_logger, time_call
from .redaction import redact_value

__all__ = ["configure_logging", "get_logger", "redact_value", "time_call"]
