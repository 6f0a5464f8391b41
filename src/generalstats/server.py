"""
GeneralStats Web Server Entry Point

Provides the `generalstats-web` command to start the FastAPI server.

Usage:
    generalstats-web                    # Start on default port 8080
    generalstats-web --port 8000        # Start on custom port
    generalstats-web --host 127.0.0.1   # Bind to localhost only
    generalstats-web --reload           # Enable auto-reload for development
"""

import argparse
import logging

import uvicorn

logger = logging.getLogger(__name__)


def main() -> None:
    """Start the GeneralStats web server."""
    parser = argparse.ArgumentParser(
        description="GeneralStats - Web Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument(
        "--workers", type=int, default=1, help="Number of worker processes (default: 1)"
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Log level (default: info)",
    )
    args = parser.parse_args()

    logger.info("Starting GeneralStats web server on http://%s:%s", args.host, args.port)

    uvicorn.run(
        "generalstats.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers if not args.reload else 1,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
