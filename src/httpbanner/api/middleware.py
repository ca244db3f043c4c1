"""
Starlette middleware that logs a request banner for every HTTP request.
"""

from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from httpbanner.core.errors import RequestBannerFailure
from httpbanner.core.logger_utils import get_logger
from httpbanner.request_banner import LogFunc, RequestBanner, RequestContext

logger = get_logger(name="httpbanner.api.middleware")


def context_from_request(request: Request) -> RequestContext:
    """Build a ``RequestContext`` from a Starlette request."""
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return RequestContext(
        method=request.method,
        url=url,
        protocol=request.url.scheme,
        headers=request.headers,
        ip=request.client.host if request.client else None,
        state=request.state,
    )


class RequestBannerMiddleware(BaseHTTPMiddleware):
    """
    Render a request banner before passing the request down the stack.

    Without an explicit handler, ``app.state.request_banner`` is used when the
    application set one (e.g. during lifespan startup), otherwise a default
    ``RequestBanner`` logging through the package logger.
    Banner failures abort the request with a 500 JSON response.
    """

    def __init__(
        self,
        app: ASGIApp,
        handler: Optional[RequestBanner] = None,
        log: Optional[LogFunc] = None,
    ):
        super().__init__(app)
        self.handler = handler
        self.default_handler = RequestBanner(log=log or logger.info)

    def resolve_handler(self, request: Request) -> RequestBanner:
        if self.handler is not None:
            return self.handler
        return getattr(request.app.state, "request_banner", None) or self.default_handler

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        handler = self.resolve_handler(request)
        try:
            await handler(context_from_request(request))
        except RequestBannerFailure as e:
            return JSONResponse(
                status_code=e.status_code,
                content={"detail": f"Failed to render request banner: {e.cause}"},
            )
        return await call_next(request)
