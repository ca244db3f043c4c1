"""
httpbanner Schemas
Pydantic models for banner configuration, geolocation records and API responses.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Tuple

from httpbanner.core.config import BORDER_GLYPH


class BannerConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, description="Name of the app starting up")
    local: Optional[str] = Field(
        None, description="Local address the app is accessible at (host or URL)"
    )
    local_port: Optional[int] = Field(
        None,
        alias="localPort",
        description="Port appended to the local address",
        ge=1,
        le=65535,
    )
    public: Optional[str] = Field(
        None, description="Public web address the app is accessible at"
    )
    border_glyph: str = Field(
        BORDER_GLYPH,
        alias="borderGlyph",
        description="Single border character of the banner",
    )
    ip: Optional[str] = Field(None, description="IP address of the host")

    @field_validator("border_glyph")
    @classmethod
    def validate_border_glyph(cls, v: str) -> str:
        """
        Validate that the border glyph is a single character.

        Args:
            v: Candidate glyph.

        Returns:
            The glyph unchanged.

        Raises:
            ValueError: If the glyph is not exactly one character.
        """
        if len(v) != 1:
            raise ValueError("border_glyph must be a single character")
        return v


class GeoLocation(BaseModel):
    country: Optional[str] = None
    subdivision: Optional[str] = None
    city: Optional[str] = None
    coords: Optional[Tuple[float, float]] = Field(
        None, description="Latitude and longitude"
    )


class GeoLookup(BaseModel):
    """Geolocation lookup results attached to a request state as ``geo``."""

    geos: List[GeoLocation] = Field(default_factory=list)


class BannerResponse(BaseModel):
    banner: str


class HealthResponse(BaseModel):
    status: str = "ok"
