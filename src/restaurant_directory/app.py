"""
AppController: loads the collection once and wires Router → Renderer → mount.

The data fetch is the only await in the application; everything after it
runs synchronously. A failed load is reported once and never retried:
the controller stays in LOAD_FAILED until the process is restarted.
"""

import asyncio
from collections.abc import Callable
from enum import Enum
from typing import Any

from restaurant_directory.config import Settings, settings as default_settings
from restaurant_directory.data.source import load_raw_collection
from restaurant_directory.data.store import RecordStore
from restaurant_directory.exceptions import DataLoadError
from restaurant_directory.logging_config import get_logger
from restaurant_directory.rendering.renderer import Renderer
from restaurant_directory.routing.location import Location
from restaurant_directory.routing.router import Router

logger = get_logger(__name__)


class AppState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    LOAD_FAILED = "load_failed"


class AppController:
    """
    Usage:
        controller = AppController(mount=print)
        await controller.start()
        controller.navigate("#/search/thai")
    """

    def __init__(
        self,
        mount: Callable[[str], None],
        config: Settings | None = None,
        fetch: Callable[[], Any] | None = None,
        store: RecordStore | None = None,
        renderer: Renderer | None = None,
        location: Location | None = None,
        on_load_error: Callable[[DataLoadError], None] | None = None,
    ):
        """
        Args:
            mount: Receives every rendered fragment.
            config: Settings override; defaults to the module-level settings.
            fetch: Blocking callable returning the raw collection. Defaults to
                reading ``config.data.source``.
            store, renderer, location: Injected collaborators, built from
                config when omitted.
            on_load_error: Called once if the initial load fails.
        """
        self.config = config or default_settings
        self.mount = mount
        self._fetch = fetch or (
            lambda: load_raw_collection(self.config.data.source, timeout=self.config.data.timeout)
        )
        self.store = store or RecordStore()
        self.renderer = renderer or Renderer(
            themes=self.config.render.card_themes,
            site_title=self.config.render.site_title,
        )
        self.location = location or Location()
        self.on_load_error = on_load_error
        self.router: Router | None = None
        self.state = AppState.IDLE
        self.load_error: DataLoadError | None = None

    async def start(self) -> AppState:
        """
        Fetch and index the collection, then start routing.

        Returns the final state (READY or LOAD_FAILED). Calling start()
        again after the first call is a no-op.
        """
        if self.state is not AppState.IDLE:
            logger.debug("AppController.start() called in state %s: ignoring", self.state.value)
            return self.state

        self.state = AppState.LOADING
        try:
            raw = await asyncio.to_thread(self._fetch)
            self.store.load(raw)
        except DataLoadError as e:
            self._fail(e)
            return self.state
        except Exception as e:
            # Any other fetch failure still has to end in LOAD_FAILED
            self._fail(DataLoadError(
                f"Could not load restaurant data: {e}",
                details={"error": type(e).__name__},
            ))
            return self.state

        self.router = Router(
            self.store,
            self.renderer,
            self.mount,
            location=self.location,
            history_limit=self.config.router.history_limit,
            default_fragment=self.config.router.default_fragment,
        )
        self.state = AppState.READY
        self.router.start()
        return self.state

    def _fail(self, error: DataLoadError) -> None:
        self.state = AppState.LOAD_FAILED
        self.load_error = error
        logger.error("Failed to load restaurant data: %s", error.message)
        self.mount(self.renderer.render_load_error())
        if self.on_load_error is not None:
            self.on_load_error(error)

    def navigate(self, fragment: str) -> None:
        """Programmatic navigation. Ignored unless the app loaded successfully."""
        if self.router is None:
            logger.debug("Navigation to %r ignored in state %s", fragment, self.state.value)
            return
        self.router.navigate(fragment)


def run(mount: Callable[[str], None], config: Settings | None = None) -> AppController:
    """Build a controller and drive its start-up to completion."""
    controller = AppController(mount=mount, config=config)
    asyncio.run(controller.start())
    return controller
