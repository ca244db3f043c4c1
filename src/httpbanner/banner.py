"""
Start-up banner for web apps.

``BannerBuilder`` accumulates the start-up fields and renders them once all
required ones are present. ``Banner`` wraps a builder and recomposes its
text whenever a field changes.
"""

import re
import sys
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, TextIO, Union

from httpbanner.core.config import BORDER_GLYPH, GLYPH_DELETE, GLYPH_POST, GLYPH_PUT
from httpbanner.core.errors import IncompleteConfiguration
from httpbanner.core.layout import (
    DELIMITER,
    STARTUP_MARGIN,
    LabeledLine,
    render_box,
    validate_glyph,
)
from httpbanner.core.logger_utils import get_logger
from httpbanner.core.results import ComposeResult
from httpbanner.core.runtime import RuntimeFacts
from httpbanner.core.schemas import BannerConfig
from httpbanner.request_banner import LogFunc, MethodGlyphs, RequestBanner

logger = get_logger(name="httpbanner.banner")

SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

REQUIRED_FIELDS = ("name", "local", "public")


def with_scheme(address: str, scheme: str) -> str:
    """Prefix ``address`` with ``scheme://`` unless it already has an http(s) scheme."""
    if SCHEME_RE.match(address):
        return address
    return f"{scheme}://{address}"


@dataclass
class BannerBuilder:
    """Accumulates start-up banner fields; ``build()`` renders once complete."""

    name: Optional[str] = None
    local: Optional[str] = None
    local_port: Optional[int] = None
    public: Optional[str] = None
    border_glyph: str = BORDER_GLYPH
    ip: Optional[str] = None
    runtime: RuntimeFacts = field(default_factory=RuntimeFacts.detect)
    starting_up_label: str = "Starting up"
    local_label: str = "local"
    public_label: str = "public"
    ip_label: str = "ip"
    arch_label: str = "arch"
    process_label: str = "process"

    def missing_fields(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def local_address(self) -> str:
        address = with_scheme(self.local, "http")
        if self.local_port:
            address = f"{address}:{self.local_port}"
        return address

    def lines(self) -> List[LabeledLine]:
        return [
            LabeledLine(f"{self.starting_up_label}{DELIMITER}", self.name),
            LabeledLine(f"{self.local_label}{DELIMITER}", self.local_address()),
            LabeledLine(
                f"{self.public_label}{DELIMITER}", with_scheme(self.public, "https")
            ),
            LabeledLine(f"{self.ip_label}{DELIMITER}", self.ip),
            LabeledLine(f"{self.arch_label}{DELIMITER}", self.runtime.arch_line),
            LabeledLine(f"{self.process_label}{DELIMITER}", self.runtime.runtime_line),
        ]

    def build(self) -> ComposeResult:
        """
        Render the banner from scratch.

        Returns:
            A complete result with the text, or an incomplete result naming
            the required fields that are still missing.
        """
        missing = self.missing_fields()
        if missing:
            return ComposeResult.incomplete(missing)
        text = render_box(
            self.lines(),
            glyph=self.border_glyph,
            include_header=True,
            margin=STARTUP_MARGIN,
        )
        return ComposeResult.composed(text)


def _builder_field(attr: str, doc: str) -> property:
    def getter(self: "Banner") -> Any:
        return getattr(self._builder, attr)

    def setter(self: "Banner", value: Any) -> None:
        setattr(self._builder, attr, value)
        self._refresh()

    return property(getter, setter, doc=doc)


class Banner:
    """
    Create and emit an app start-up banner.

    Setting any field recomposes the banner once ``name``, ``local`` and
    ``public`` are all present. Not thread-safe: serialize setter calls.
    """

    name = _builder_field("name", "Name of the app starting up.")
    local = _builder_field("local", "Local address the app is accessible at.")
    local_port = _builder_field("local_port", "Port appended to the local address.")
    public = _builder_field("public", "Public web address the app is accessible at.")
    ip = _builder_field("ip", "IP address of the host.")
    starting_up_label = _builder_field("starting_up_label", "Label of the app name line.")
    local_label = _builder_field("local_label", "Label of the local address line.")
    public_label = _builder_field("public_label", "Label of the public address line.")
    arch_label = _builder_field("arch_label", "Label of the architecture line.")
    process_label = _builder_field("process_label", "Label of the runtime line.")

    def __init__(
        self,
        config: Optional[Union[BannerConfig, Mapping[str, Any]]] = None,
        runtime: Optional[RuntimeFacts] = None,
    ):
        """
        Create a banner, composing it immediately if ``config`` is complete.

        Args:
            config: ``BannerConfig`` or mapping with name, local, local_port,
                public, border_glyph and ip. Unknown keys are ignored.
            runtime: Runtime facts to display. Detected from the host if None.
        """
        self._builder = BannerBuilder(runtime=runtime or RuntimeFacts.detect())
        self._banner_text: Optional[str] = None

        if config is not None:
            if not isinstance(config, BannerConfig):
                config = BannerConfig.model_validate(dict(config))
            self._builder.name = config.name
            self._builder.local = config.local
            self._builder.local_port = config.local_port
            self._builder.public = config.public
            self._builder.border_glyph = config.border_glyph
            self._builder.ip = config.ip

        self._refresh()

    def _refresh(self) -> None:
        result = self._builder.build()
        if result.complete:
            self._banner_text = result.text
        else:
            logger.debug(f"Banner not composed yet, missing: {', '.join(result.missing)}")

    def compose(self) -> str:
        """
        Compose the fields into the banner text.

        Raises:
            IncompleteConfiguration: If name, local or public is missing. The
                previously composed text is kept.
        """
        result = self._builder.build()
        if not result.complete:
            raise IncompleteConfiguration(result.missing)
        self._banner_text = result.text
        return result.text

    @property
    def border_glyph(self) -> str:
        """Border glyph of the start-up banner, also used for GET request banners."""
        return self._builder.border_glyph

    @border_glyph.setter
    def border_glyph(self, glyph: str) -> None:
        self._builder.border_glyph = validate_glyph(glyph)
        self._refresh()

    @property
    def banner_text(self) -> Optional[str]:
        """The last composed banner, or None if never composed."""
        return self._banner_text

    def print(self, file: Optional[TextIO] = None) -> bool:
        """
        Write the composed banner to standard output (or ``file``).

        Returns:
            True if there was banner text to write, otherwise False.
        """
        if not self._banner_text:
            return False
        print(self._banner_text, file=file or sys.stdout)
        return True

    def create_request_handler(self, log: Optional[LogFunc] = None) -> RequestBanner:
        """
        Create a per-request banner renderer.

        The method glyphs are captured now; changing ``border_glyph`` later
        does not affect handlers already created.

        Args:
            log: Sink for the rendered request banners. Defaults to stdout.
        """
        glyphs = MethodGlyphs(
            get=self.border_glyph,
            post=GLYPH_POST,
            put=GLYPH_PUT,
            delete=GLYPH_DELETE,
        )
        return RequestBanner(glyphs=glyphs, log=log)

    use = create_request_handler
