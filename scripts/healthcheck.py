#!/usr/bin/env python
"""Simple container healthcheck probing the jukebox /healthz endpoint."""

import os
import sys
from urllib import request, error


def main() -> int:
    host = os.getenv("HEALTHCHECK_HOST", "127.0.0.1")
    port = os.getenv("PORT", "5000")
    target = f"http://{host}:{port}/healthz"
    try:
        with request.urlopen(target, timeout=5) as resp:
            return 0 if resp.status == 200 else 1
    except error.URLError:
        # urllib raises HTTPError (a URLError) for the 503 "degraded" response
        return 1


if __name__ == "__main__":
    sys.exit(main())
