"""
Per-request banner rendering.

A ``RequestBanner`` is created once (usually from ``Banner.create_request_handler``)
and invoked for every inbound request with a fresh ``RequestContext``.
"""

import inspect
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Union

from httpbanner.core.config import BORDER_GLYPH, GLYPH_DELETE, GLYPH_POST, GLYPH_PUT
from httpbanner.core.errors import MissingField, RequestBannerFailure
from httpbanner.core.layout import REQUEST_MARGIN, LabeledLine, render_box, validate_glyph
from httpbanner.core.logger_utils import get_logger
from httpbanner.core.schemas import GeoLocation

logger = get_logger(name="httpbanner.request_banner")

EMPTY_HEADER = "<empty header field>"
US_COUNTRY_RE = re.compile(r"united states|usa", re.IGNORECASE)

LogFunc = Callable[[str], Any]
NextFunc = Callable[[str], Union[Awaitable[Any], Any]]


def console_write(text: str) -> None:
    """Default sink: write the banner to standard output."""
    sys.stdout.write(f"{text}\n")
    sys.stdout.flush()


@dataclass(frozen=True)
class MethodGlyphs:
    """Border glyph per HTTP method. Unknown methods use the GET glyph."""

    get: str = BORDER_GLYPH
    post: str = GLYPH_POST
    put: str = GLYPH_PUT
    delete: str = GLYPH_DELETE

    def __post_init__(self):
        for glyph in (self.get, self.post, self.put, self.delete):
            validate_glyph(glyph)

    def for_method(self, method: str) -> str:
        return {
            "get": self.get,
            "post": self.post,
            "put": self.put,
            "delete": self.delete,
        }.get(method.lower(), self.get)


def _lookup(obj: Any, key: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


@dataclass
class RequestContext:
    """
    The request facts a request banner is rendered from.

    ``url`` is the request path including any query string. Geolocation,
    when a lookup ran upstream, is read from ``state.geo.geos[0]``.
    """

    method: Optional[str] = None
    url: Optional[str] = None
    protocol: str = "http"
    headers: Mapping[str, str] = field(default_factory=dict)
    ip: Optional[str] = None
    state: Any = None

    def header(self, name: str) -> Optional[str]:
        value = self.headers.get(name)
        if value is not None:
            return value
        lowered = name.lower()
        for key, candidate in self.headers.items():
            if key.lower() == lowered:
                return candidate
        return None

    def geolocation(self) -> Optional[GeoLocation]:
        geos = _lookup(_lookup(self.state, "geo"), "geos")
        if not geos:
            return None
        first = geos[0]
        if isinstance(first, GeoLocation):
            return first
        if first is None:
            return None
        if isinstance(first, Mapping):
            return GeoLocation.model_validate(first)
        return GeoLocation.model_validate(first, from_attributes=True)

    def throw(self, status_code: int, error: BaseException) -> None:
        raise RequestBannerFailure(status_code, error) from error


def format_location(geo: GeoLocation) -> Optional[str]:
    """
    Format a geolocation record for the ``Location:`` line.

    Args:
        geo: Geolocation record of the client.

    Returns:
        ``Country: X, State: Y, City: Z, lat/lon: LAT, LON`` with absent parts
        left out, or None if the record holds nothing.
    """
    parts = []
    if geo.country:
        parts.append(f"Country: {geo.country}")
    if geo.subdivision:
        is_us = bool(geo.country and US_COUNTRY_RE.search(geo.country))
        parts.append(f"{'State' if is_us else 'Subdivision'}: {geo.subdivision}")
    if geo.city:
        parts.append(f"City: {geo.city}")
    if geo.coords:
        parts.append(f"lat/lon: {geo.coords[0]}, {geo.coords[1]}")
    return ", ".join(parts) or None


@dataclass(frozen=True)
class RequestFields:
    """Snapshot of one request, built per render and then discarded."""

    method: str
    host: str
    url: str
    protocol: str = "http"
    referer: Optional[str] = None
    client_ip: Optional[str] = None
    geolocation: Optional[GeoLocation] = None
    timestamp: Optional[datetime] = None

    @classmethod
    def from_context(
        cls,
        context: Optional[RequestContext],
        clock: Callable[[], datetime] = datetime.now,
    ) -> "RequestFields":
        """
        Validate a request context and snapshot its fields.

        Checks run in order context, host header, method, url; the first
        failure wins.

        Raises:
            MissingField: If a required field is absent.
        """
        if context is None:
            raise MissingField("context", "Missing required request context.")
        host = context.header("host")
        if not host:
            raise MissingField("host", "Missing required request header host value.")
        if not context.method:
            raise MissingField("method")
        if not context.url:
            raise MissingField("url")
        return cls(
            method=context.method,
            host=host,
            url=context.url,
            protocol=context.protocol or "http",
            referer=context.header("referer"),
            client_ip=context.ip,
            geolocation=context.geolocation(),
            timestamp=clock(),
        )

    def lines(self) -> List[LabeledLine]:
        full_url = f"{self.protocol}://{self.host}{self.url}"
        query = None
        if "?" in full_url:
            full_url, query = full_url.split("?", 1)
            query = f"?{query}"

        location = format_location(self.geolocation) if self.geolocation else None
        timestamp = (self.timestamp or datetime.now()).strftime("%c")

        return [
            LabeledLine(f"{self.method}:", full_url),
            LabeledLine("Query Params:", query),
            LabeledLine(
                "Referer:", self.referer if self.referer is not None else EMPTY_HEADER
            ),
            LabeledLine("From IP:", self.client_ip),
            LabeledLine("Location:", location),
            LabeledLine("Timestamp:", timestamp),
        ]


class RequestBanner:
    """
    Renders and logs a bordered banner for every request.

    The glyph table and log sink are fixed at construction; each call works
    only on the context it is given.
    """

    def __init__(
        self,
        glyphs: Optional[MethodGlyphs] = None,
        log: Optional[LogFunc] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.glyphs = glyphs or MethodGlyphs()
        self.log = log or console_write
        self.clock = clock or datetime.now

    def render(self, context: Optional[RequestContext]) -> str:
        """Validate the context and return the request banner text."""
        fields = RequestFields.from_context(context, self.clock)
        return render_box(
            fields.lines(),
            glyph=self.glyphs.for_method(fields.method),
            include_header=False,
            margin=REQUEST_MARGIN,
        )

    async def __call__(
        self, context: Optional[RequestContext], next: Optional[NextFunc] = None
    ) -> Optional[str]:
        """
        Render the banner, log it, then hand off to ``next`` with the method name.

        Failures are surfaced through ``context.throw(500, error)``.
        """
        if context is None:
            raise MissingField("context", "Missing required request context.")

        text = None
        try:
            text = self.render(context)
            self.log(text)
            if next is not None:
                result = next(context.method)
                if inspect.isawaitable(result):
                    await result
        except Exception as e:
            logger.error(f"Request banner failed for {context.method} {context.url}: {e}")
            context.throw(500, e)
        return text
