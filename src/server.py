"""Stockroom HTTP server runner.

Usage:
    python src/server.py                  # host/port from STOCKROOM_HOST / STOCKROOM_PORT
    python src/server.py --port 8000
    python src/server.py --reload
"""

import argparse

import uvicorn

from stockroom.config import Settings


def main():
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Stockroom API server")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Reload on source changes (development)")
    args = parser.parse_args()

    # A single worker: collection locks are per process.
    uvicorn.run("app:app", host=args.host, port=args.port, reload=args.reload, workers=1)


if __name__ == "__main__":
    main()
