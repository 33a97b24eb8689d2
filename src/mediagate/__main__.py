"""Entry point for running the gateway.

Usage:
    python -m mediagate
    python -m mediagate --port 8080 --reload
"""

import argparse

import uvicorn

from .config import get_settings


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="mediagate",
        description="Image ingestion gateway",
    )
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Listening port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser


def main() -> None:
    """Run the HTTP server."""
    args = create_parser().parse_args()
    uvicorn.run(
        "mediagate.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
