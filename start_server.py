#!/usr/bin/env python3
"""Start the API with uvicorn, honouring the PORT environment variable."""

import os
import sys

import uvicorn

port = os.environ.get("PORT", "8000")

try:
    port_int = int(port)
except ValueError:
    print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
    port_int = 8000

if __name__ == "__main__":
    print(f"Starting server on port {port_int}...", file=sys.stderr)
    uvicorn.run(
        "cleaning_planner.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=port_int,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
