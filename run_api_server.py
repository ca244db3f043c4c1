#!/usr/bin/env python3
"""
httpbanner Demo Server Runner

Simple script to run the demo FastAPI server with uvicorn.
"""

import uvicorn
from httpbanner.core.config import SERVER_HOST, SERVER_PORT
from httpbanner.api.server import app

if __name__ == "__main__":
    uvicorn.run(
        app,
        host=SERVER_HOST,
        port=SERVER_PORT,
        log_level="info",
        reload=False,
    )
