#!/usr/bin/env python3
"""
Error taxonomy shared by the assignment coordinator and the web layer.

The matching scorer never raises: it normalizes its input instead.
"""

from typing import Optional


class ThesisMatchError(Exception):
    """Base class for business-rule failures reported to the caller."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFoundError(ThesisMatchError):
    """Referenced student, supervisor or stage does not exist."""
    pass


class ConflictError(ThesisMatchError):
    """A business rule forbids the requested mutation."""
    pass


class ValidationError(ThesisMatchError):
    """Required identifiers or fields are missing or malformed."""
    pass
