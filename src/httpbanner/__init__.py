"""
httpbanner - start-up and request banners for web apps

Main interface: ``Banner`` for the start-up banner and ``RequestBanner`` for
the per-request banner.
"""

from httpbanner.banner import Banner, BannerBuilder
from httpbanner.request_banner import MethodGlyphs, RequestBanner, RequestContext

__all__ = ["Banner", "BannerBuilder", "MethodGlyphs", "RequestBanner", "RequestContext"]
