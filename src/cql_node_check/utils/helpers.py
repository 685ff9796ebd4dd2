"""Helper utilities for the node check."""

import math
from typing import Any, Dict, List, Optional


def format_millis(value: Optional[float]) -> str:
    """Format a millisecond reading for plugin output; missing values become NaN."""
    if value is None or math.isnan(value):
        return "NaN"
    return f"{value:.3f}"


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        remaining_seconds = seconds % 60
        return f"{minutes}m {remaining_seconds:.1f}s"


def mask_sensitive_data(data: Dict[str, Any], sensitive_keys: Optional[List[str]] = None) -> Dict[str, Any]:
    """Mask sensitive data in dictionaries for logging."""
    if sensitive_keys is None:
        sensitive_keys = ['password', 'secret', 'token', 'auth']

    masked_data = {}
    for key, value in data.items():
        if any(sensitive_key in key.lower() for sensitive_key in sensitive_keys):
            masked_data[key] = "***" if value else value
        elif isinstance(value, dict):
            masked_data[key] = mask_sensitive_data(value, sensitive_keys)
        else:
            masked_data[key] = value

    return masked_data
