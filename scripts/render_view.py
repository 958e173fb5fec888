"""
Render one directory view to stdout without a browser.

    python scripts/render_view.py "#/area/west-london"
    python scripts/render_view.py "#/search/thai" --source data/restaurants.json
    python scripts/render_view.py --stats
"""

import argparse
import json
import sys
from pathlib import Path

# Add src to path
sys.path.append(str(Path(__file__).resolve().parent.parent / "src"))

from restaurant_directory.config import settings
from restaurant_directory.data.source import load_raw_collection
from restaurant_directory.data.store import RecordStore
from restaurant_directory.exceptions import DataLoadError
from restaurant_directory.logging_config import get_logger, setup_logging
from restaurant_directory.rendering.renderer import Renderer
from restaurant_directory.routing.router import Router

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("fragment", nargs="?", default="#/", help="URL fragment to render (default: #/)")
    parser.add_argument("--source", default=settings.data.source, help="Path or URL of the restaurant document")
    parser.add_argument("--stats", action="store_true", help="Print collection stats as JSON instead of markup")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    args = parser.parse_args(argv)

    # stdout is reserved for markup
    setup_logging(level="DEBUG" if args.verbose else settings.logging.level, log_file=None, stream=sys.stderr)

    store = RecordStore()
    try:
        store.load(load_raw_collection(args.source, timeout=settings.data.timeout))
    except DataLoadError as e:
        logger.error("Cannot load %s: %s", args.source, e.message)
        print(Renderer().render_load_error(), end="")
        return 1

    if args.stats:
        print(json.dumps(store.stats().model_dump(), indent=2))
        return 0

    router = Router(store, Renderer(), mount=lambda markup: print(markup, end=""))
    view = router.dispatch(args.fragment)
    logger.debug("Rendered %r", view)
    return 0


if __name__ == "__main__":
    sys.exit(main())
