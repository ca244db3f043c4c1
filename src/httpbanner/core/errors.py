"""
Error types raised while composing and rendering banners.
"""

from typing import List, Optional


class BannerError(Exception):
    """Base class for all httpbanner errors."""


class IncompleteConfiguration(BannerError):
    """Start-up banner composed before all required fields were set."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required inputs: {', '.join(self.missing)}")


class MissingField(BannerError):
    """A request banner was rendered without a required request field."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Missing required request {field} value.")


class InvalidLabel(BannerError, ValueError):
    """A line label does not end with the alignment delimiter."""

    def __init__(self, label: str, delimiter: str = ":"):
        self.label = label
        self.delimiter = delimiter
        super().__init__(f"Label {label!r} must end with {delimiter!r}")


class InvalidGlyph(BannerError, ValueError):
    """A border glyph is not exactly one character."""

    def __init__(self, glyph: str):
        self.glyph = glyph
        super().__init__(f"Border glyph must be a single character, got {glyph!r}")


class RequestBannerFailure(BannerError):
    """
    Fatal request-level error surfaced to the hosting pipeline.

    Carries the HTTP status code and the original failure as ``cause``.
    """

    def __init__(self, status_code: int, cause: BaseException):
        self.status_code = status_code
        self.cause = cause
        super().__init__(f"{status_code}, {cause}")
