#!/usr/bin/env python3
import os

import uvicorn
from kbpages.app import create_app

# Create the FastAPI app
app = create_app()


if __name__ == "__main__":
    host = os.getenv("KBPAGES_HOST", "127.0.0.1")
    port = int(os.getenv("KBPAGES_PORT", "8000"))
    reload_enabled = os.getenv("KBPAGES_DEV_MODE", "false").lower() == "true"

    print(f"Starting kbpages on {host}:{port}")
    uvicorn.run("main:app", host=host, port=port, reload=reload_enabled)
