"""
httpbanner Configuration Module
"""

from decouple import config

BORDER_GLYPH = config("HTTPBANNER_BORDER_GLYPH", default="#")
GLYPH_POST = config("HTTPBANNER_GLYPH_POST", default="@")
GLYPH_PUT = config("HTTPBANNER_GLYPH_PUT", default="&")
GLYPH_DELETE = config("HTTPBANNER_GLYPH_DELETE", default="*")

APP_NAME = config("HTTPBANNER_APP_NAME", default="httpbanner")
LOCAL_ADDRESS = config("HTTPBANNER_LOCAL", default="localhost")
LOCAL_PORT = config("HTTPBANNER_LOCAL_PORT", default=8001, cast=int)
PUBLIC_ADDRESS = config("HTTPBANNER_PUBLIC", default="localhost")

SERVER_HOST = config("HTTPBANNER_HOST", default="0.0.0.0")
SERVER_PORT = config("HTTPBANNER_PORT", default=8001, cast=int)
