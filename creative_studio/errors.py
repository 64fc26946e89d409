"""
Exception hierarchy for the studio.

Every error carries an ``ErrorKind`` so the controller can turn it into a
user-visible notice without inspecting the concrete class.
"""

from typing import Optional

from creative_studio.models import ErrorKind


class StudioError(Exception):
    """Base class for recoverable studio failures."""

    kind: ErrorKind = ErrorKind.API

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StudioError):
    """Missing or blank user input."""

    kind = ErrorKind.VALIDATION


class ApiError(StudioError):
    """Non-success status or unusable response from the generation service."""

    kind = ErrorKind.API

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ClipboardError(StudioError):
    kind = ErrorKind.CLIPBOARD


class ArchiveError(StudioError):
    kind = ErrorKind.ARCHIVE
