#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

from typing import Optional
from datetime import datetime


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Safely convert datetime to ISO format string.

    Args:
        dt: Datetime object.

    Returns:
        ISO format string or None.
    """
    if dt is None:
        return None
    try:
        return dt.isoformat()
    except AttributeError:
        return str(dt)


def percent(part: int, whole: int) -> int:
    """Whole-number percentage, 0 when ``whole`` is not positive."""
    if not whole or whole <= 0:
        return 0
    return int(part * 100 / whole + 0.5)
