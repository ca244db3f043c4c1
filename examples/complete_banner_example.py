"""
httpbanner - Complete Example
=============================

Scenario: a web app announcing itself at start-up and logging every request
- Start-up banner built field by field
- Request banners for a few simulated requests
- Geolocation attached by an upstream lookup

This example uses the SDK directly, without a web framework.
"""

import asyncio
from httpbanner import Banner, RequestContext
from httpbanner.core.errors import IncompleteConfiguration, RequestBannerFailure


async def main():
    """Start-up banner plus a handful of request banners."""

    # ==========================================
    # STEP 1: Start-up banner
    # ==========================================
    banner = Banner()
    banner.name = "Shop API"
    banner.local = "127.0.0.1"
    banner.local_port = 8080

    try:
        banner.compose()
    except IncompleteConfiguration as e:
        print(f"⚠️  Not ready yet: {e}")

    banner.public = "shop.example.com"
    banner.print()

    # ==========================================
    # STEP 2: Request banners
    # ==========================================
    handler = banner.create_request_handler()

    async def next_stage(method: str):
        print(f"➡️  {method} handed to the next stage\n")

    requests = [
        RequestContext(
            method="GET",
            url="/products?page=2",
            protocol="https",
            headers={"host": "shop.example.com", "referer": "https://search.test"},
            ip="203.0.113.7",
        ),
        RequestContext(
            method="POST",
            url="/cart",
            protocol="https",
            headers={"host": "shop.example.com"},
            ip="198.51.100.23",
            state={
                "geo": {
                    "geos": [
                        {
                            "country": "United States",
                            "subdivision": "Oregon",
                            "city": "Portland",
                            "coords": (45.52, -122.68),
                        }
                    ]
                }
            },
        ),
    ]

    for context in requests:
        await handler(context, next_stage)

    # ==========================================
    # STEP 3: A request without a Host header
    # ==========================================
    try:
        await handler(RequestContext(method="GET", url="/"))
    except RequestBannerFailure as e:
        print(f"❌ Request rejected with {e.status_code}: {e.cause}")


if __name__ == "__main__":
    asyncio.run(main())
