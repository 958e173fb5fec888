"""
Serve the restaurant dataset API with uvicorn.

    python scripts/serve_api.py
    python scripts/serve_api.py --port 9000 --no-reload
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.append(str(Path(__file__).resolve().parent.parent / "src"))

import uvicorn

from restaurant_directory.config import settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--host", default=settings.api.host, help=f"Bind address (default: {settings.api.host})")
    parser.add_argument("--port", type=int, default=settings.api.port, help=f"Port (default: {settings.api.port})")
    parser.add_argument(
        "--reload",
        action=argparse.BooleanOptionalAction,
        default=settings.api.reload,
        help="Restart on code changes",
    )
    args = parser.parse_args(argv)

    print(f"Serving {settings.data.source} on http://{args.host}:{args.port}")
    uvicorn.run(
        "restaurant_directory.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
