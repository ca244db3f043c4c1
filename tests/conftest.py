"""
Pytest configuration and shared fixtures for httpbanner tests.
"""

import pytest
from datetime import datetime

from httpbanner.core.runtime import RuntimeFacts
from httpbanner.request_banner import RequestContext


@pytest.fixture
def runtime_facts():
    """Fixed runtime facts so rendered banners do not depend on the host."""
    return RuntimeFacts(
        arch="x86_64", platform="linux", name="cpython", version="3.12.1"
    )


@pytest.fixture
def banner_config():
    """Complete start-up banner configuration."""
    return {
        "name": "Banner Test #1",
        "public": "https://banner.test",
        "local": "http://banner.local",
        "local_port": 8921,
    }


@pytest.fixture
def fixed_clock():
    """Clock returning a constant timestamp."""
    return lambda: datetime(2024, 1, 2, 3, 4, 5)


@pytest.fixture
def make_context():
    """Factory for request contexts with sensible defaults."""

    def factory(**overrides):
        values = {
            "method": "GET",
            "url": "/a/really/long/url/to/a/special/page",
            "protocol": "https",
            "headers": {"host": "banner.test", "referer": "https://googoogle.com"},
            "ip": "192.168.1.20",
        }
        values.update(overrides)
        return RequestContext(**values)

    return factory
