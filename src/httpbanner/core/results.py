"""
Structured result of building a start-up banner.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ComposeResult:
    """Either the composed banner text or the list of missing required fields."""

    complete: bool
    text: Optional[str] = None
    missing: List[str] = field(default_factory=list)

    @classmethod
    def composed(cls, text: str) -> "ComposeResult":
        """Create a complete result."""
        return cls(complete=True, text=text)

    @classmethod
    def incomplete(cls, missing: List[str]) -> "ComposeResult":
        """Create a result for a configuration still missing fields."""
        return cls(complete=False, missing=list(missing))
