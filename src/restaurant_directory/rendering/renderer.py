"""
Template renderer: view + read-only store → HTML fragment.

Rendering is pure: the store is only read, nothing touches the
filesystem after the templates are loaded, and identical inputs always
produce identical strings. Missing data never raises; it turns into the
not-found fragment or a placeholder marker.
"""

from collections.abc import Iterable, Sequence

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from restaurant_directory.config import settings
from restaurant_directory.data.models import Restaurant
from restaurant_directory.data.store import RecordStore
from restaurant_directory.exceptions import AreaNotFoundError, RestaurantNotFoundError
from restaurant_directory.logging_config import get_logger
from restaurant_directory.routing.views import (
    AreaView,
    HomeView,
    NotFoundView,
    RestaurantDetailView,
    SearchView,
    View,
)

logger = get_logger(__name__)

PLACEHOLDER_CLASS = "placeholder"


def format_rating(value: float | int | None) -> str:
    return f"{float(value or 0):.1f}"


def humanize(value: str) -> str:
    """'wheelchair_accessible' → 'Wheelchair accessible'."""
    text = str(value).replace("_", " ").replace("-", " ").strip()
    return text[:1].upper() + text[1:]


def create_environment() -> Environment:
    """Jinja2 environment for the bundled templates: autoescaped, strict about undefined names."""
    env = Environment(
        loader=PackageLoader("restaurant_directory", "templates"),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )
    env.filters["rating"] = format_rating
    env.filters["humanize"] = humanize
    return env


def theme_for_position(position: int, themes: Sequence[str]) -> str:
    """Visual theme for the card at ``position`` in a listing: rotates through ``themes``."""
    return themes[position % len(themes)]


class Renderer:
    """
    Usage:
        renderer = Renderer()
        html = renderer.render(AreaView("west-london"), store)
    """

    def __init__(
        self,
        environment: Environment | None = None,
        themes: Sequence[str] | None = None,
        site_title: str | None = None,
    ):
        self.env = environment or create_environment()
        self.themes = tuple(themes if themes is not None else settings.render.card_themes)
        if not self.themes:
            raise ValueError("At least one card theme is required")
        self.site_title = site_title or settings.render.site_title
        self._handlers = {
            HomeView: lambda view, store: self.render_home(store),
            AreaView: lambda view, store: self.render_area(store, view.area_id),
            RestaurantDetailView: lambda view, store: self.render_restaurant_detail(store, view.restaurant_id),
            SearchView: lambda view, store: self.render_search(store, view.query),
            NotFoundView: lambda view, store: self.render_not_found(view.fragment),
        }

    def render(self, view: View, store: RecordStore) -> str:
        """Dispatch on the view kind. Unknown view types render the not-found fragment."""
        handler = self._handlers.get(type(view))
        if handler is None:
            logger.warning("No renderer for view %r", view)
            return self.render_not_found("")
        return handler(view, store)

    def _template(self, name: str, **context) -> str:
        return self.env.get_template(name).render(**context).strip() + "\n"

    def _cards(self, restaurants: Iterable[Restaurant]) -> list[dict]:
        return [
            {"restaurant": r, "theme": theme_for_position(i, self.themes)}
            for i, r in enumerate(restaurants)
        ]

    # --- Views ---

    def render_home(self, store: RecordStore) -> str:
        return self._template(
            "home.html",
            site_title=self.site_title,
            stats=store.stats(),
            areas=store.areas(),
            cards=self._cards(store.records),
        )

    def render_area(self, store: RecordStore, area_id: str) -> str:
        try:
            summary = store.get_area_by_id(area_id)
            listing = store.list_by_area(area_id)
        except AreaNotFoundError:
            return self.render_not_found(
                f"#/area/{area_id}",
                title="Area not found",
                message="We don't have an area with that name.",
            )
        return self._template("area.html", summary=summary, cards=self._cards(listing))

    def render_restaurant_detail(self, store: RecordStore, restaurant_id: int) -> str:
        try:
            restaurant = store.get_by_id(restaurant_id)
        except RestaurantNotFoundError:
            return self.render_not_found(
                f"#/restaurant/{restaurant_id}",
                title="Restaurant not found",
                message="That restaurant isn't in the directory.",
            )
        return self._template(
            "restaurant.html",
            restaurant=restaurant,
            area=store.area_of(restaurant.id),
            hours=restaurant.hours_by_weekday() if restaurant.working_hours else None,
            amenities=restaurant.amenities,
        )

    def render_search(self, store: RecordStore, query: str) -> str:
        results = store.search(query)
        return self._template(
            "search.html",
            query=query,
            count=len(results),
            cards=self._cards(results),
        )

    def render_not_found(
        self,
        fragment: str,
        title: str = "Page not found",
        message: str = "There's nothing at this address.",
    ) -> str:
        return self._template("not_found.html", fragment=fragment, title=title, message=message)

    def render_load_error(self, message: str = "The restaurant list could not be loaded.") -> str:
        return self._template("load_error.html", message=message)
