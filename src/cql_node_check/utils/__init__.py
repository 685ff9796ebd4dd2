"""Utility modules for the node check."""

from .validators import EndpointValidator, ValidationError
from .helpers import format_millis, format_duration, mask_sensitive_data
from .logging import configure_logging, StructuredLogger

__all__ = [
    'EndpointValidator',
    'ValidationError',
    'format_millis',
    'format_duration',
    'mask_sensitive_data',
    'configure_logging',
    'StructuredLogger'
]
