#!/usr/bin/env python3
"""
Parent Auth API server.

Serves the FastAPI app with uvicorn.
"""

import argparse
import logging
import os
import sys

import uvicorn
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Run the Parent Auth API")
    parser.add_argument(
        "--host",
        default=os.getenv("API_HOST", "0.0.0.0"),
        help="Bind address (default: $API_HOST or 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("API_PORT", "8000")),
        help="Bind port (default: $API_PORT or 8000)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on code changes (development)"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    )

    logger.info(f"Starting Parent Auth API on {args.host}:{args.port}...")
    uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
