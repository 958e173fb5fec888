"""
Fragment router: the navigation state machine.

Each fragment-change event from the Location is resolved against the
route table, rendered exactly once and handed to the mount callable.
The resolved view then replaces ``current``. Unmatched fragments resolve
to NotFoundView; the next event can always leave that state.
"""

from collections import deque
from collections.abc import Callable
from typing import Protocol

from restaurant_directory.config import settings
from restaurant_directory.data.store import RecordStore
from restaurant_directory.exceptions import RouteUnmatchedError, RouterError
from restaurant_directory.logging_config import get_logger
from restaurant_directory.routing.location import Location
from restaurant_directory.routing.routes import DEFAULT_ROUTES, RouteTable
from restaurant_directory.routing.views import NotFoundView, View

logger = get_logger(__name__)


class ViewRenderer(Protocol):
    def render(self, view: View, store: RecordStore) -> str: ...


class Router:
    """
    Usage:
        router = Router(store, Renderer(), mount=container.replace)
        router.start()
        router.navigate("#/area/west-london")
    """

    def __init__(
        self,
        store: RecordStore,
        renderer: ViewRenderer,
        mount: Callable[[str], None],
        location: Location | None = None,
        routes: RouteTable = DEFAULT_ROUTES,
        history_limit: int | None = None,
        default_fragment: str | None = None,
    ):
        self.store = store
        self.renderer = renderer
        self.mount = mount
        self.location = location or Location()
        self.routes = routes
        limit = history_limit if history_limit is not None else settings.router.history_limit
        self._history: deque[View] = deque(maxlen=max(limit, 1))
        self.default_fragment = default_fragment or settings.router.default_fragment
        self._current: View | None = None
        self._current_markup: str | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def current(self) -> View | None:
        return self._current

    @property
    def current_markup(self) -> str | None:
        return self._current_markup

    @property
    def history(self) -> tuple[View, ...]:
        """Views dispatched so far, oldest first (bounded)."""
        return tuple(self._history)

    @property
    def started(self) -> bool:
        return self._unsubscribe is not None

    def resolve(self, fragment: str | None) -> View:
        """Map a fragment to a view without rendering anything."""
        try:
            return self.routes.match(fragment)
        except RouteUnmatchedError as e:
            logger.debug("%s", e.message)
            return NotFoundView(fragment=fragment or "")

    def dispatch(self, fragment: str | None) -> View:
        """Resolve, render once, mount, then replace the current view."""
        view = self.resolve(fragment)
        markup = self.renderer.render(view, self.store)
        self.mount(markup)
        self._current = view
        self._current_markup = markup
        self._history.append(view)
        logger.debug("Dispatched %r -> %r", fragment, view)
        return view

    def start(self) -> View:
        """
        Begin observing the Location and render the startup fragment.

        The startup render goes through the Location like any other event,
        so navigation triggered while it is being mounted is queued behind it.

        Raises:
            RouterError: if the router is already running.
        """
        if self.started:
            raise RouterError("Router has already been started")
        self._unsubscribe = self.location.subscribe(self.dispatch)
        if self.location.fragment:
            self.location.reload()
        else:
            self.location.replace(self.default_fragment)
        logger.info("Router started on %r", self._current)
        return self._current

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def navigate(self, fragment: str) -> None:
        """Programmatic navigation: goes through the same change event as user navigation."""
        self.location.assign(fragment)

    def back(self) -> bool:
        return self.location.back()

    def forward(self) -> bool:
        return self.location.forward()
