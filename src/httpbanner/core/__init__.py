"""
Core Components
- Box layout engine
- Errors, results and schemas
- Configuration and logging
"""

from .layout import LabeledLine, render_box
from .errors import (
    BannerError,
    IncompleteConfiguration,
    InvalidGlyph,
    InvalidLabel,
    MissingField,
    RequestBannerFailure,
)


__all__ = [
    "LabeledLine",
    "render_box",
    "BannerError",
    "IncompleteConfiguration",
    "InvalidGlyph",
    "InvalidLabel",
    "MissingField",
    "RequestBannerFailure",
]
