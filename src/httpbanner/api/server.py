"""
httpbanner demo FastAPI server

Prints the start-up banner during lifespan startup and logs a request banner
for every request through ``RequestBannerMiddleware``.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Request, status

from httpbanner.banner import Banner
from httpbanner.core.config import APP_NAME, LOCAL_ADDRESS, LOCAL_PORT, PUBLIC_ADDRESS
from httpbanner.core.errors import IncompleteConfiguration
from httpbanner.core.logger_utils import get_logger
from httpbanner.core.schemas import BannerResponse, HealthResponse
from httpbanner.api.middleware import RequestBannerMiddleware


logger = get_logger(name="httpbanner.api.server")


def create_startup_banner() -> Banner:
    """Build the start-up banner from the HTTPBANNER_* settings."""
    return Banner(
        {
            "name": APP_NAME,
            "local": LOCAL_ADDRESS,
            "local_port": LOCAL_PORT,
            "public": PUBLIC_ADDRESS,
        }
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Compose and print the start-up banner, then install the request banner handler."""
    banner = create_startup_banner()
    try:
        banner.compose()
        banner.print()
    except IncompleteConfiguration as e:
        logger.warning(f"Start-up banner not printed: {e}")

    app.state.banner = banner
    app.state.request_banner = banner.create_request_handler(log=logger.info)

    yield

    logger.info(f"Shutting down {banner.name or 'app'}...")
    app.state.request_banner = None


app = FastAPI(
    title="httpbanner demo",
    description="Demo app logging a start-up banner and a banner per request",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(RequestBannerMiddleware)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health():
    return HealthResponse()


@app.get(
    "/api/v1/banner",
    response_model=BannerResponse,
    summary="Get the composed start-up banner",
    tags=["Banner"],
)
async def get_banner(request: Request):
    """Return the start-up banner text, 503 if it has not been composed."""
    banner = getattr(request.app.state, "banner", None)
    if banner is None or not banner.banner_text:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Start-up banner not composed",
        )
    return BannerResponse(banner=banner.banner_text)
