"""
Host runtime facts shown on the start-up banner.
"""

import platform
import sys
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RuntimeFacts:
    """Read-only description of the process platform and interpreter."""

    arch: str
    platform: str
    name: str
    version: str
    lts: Optional[str] = None

    @classmethod
    def detect(cls) -> "RuntimeFacts":
        """Collect the facts for the running interpreter."""
        release = sys.version_info.releaselevel
        return cls(
            arch=platform.machine() or "unknown",
            platform=sys.platform,
            name=sys.implementation.name,
            version=platform.python_version(),
            lts=None if release == "final" else release,
        )

    @property
    def arch_line(self) -> str:
        return f"{self.arch} {self.platform}"

    @property
    def runtime_line(self) -> str:
        line = f"{self.name} {self.version}"
        if self.lts:
            line += f" ({self.lts})"
        return line
