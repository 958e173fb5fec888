"""Fragment routing: views, route table, location history and the router."""

from restaurant_directory.routing.views import (
    View, HomeView, AreaView, RestaurantDetailView, SearchView, NotFoundView,
)
from restaurant_directory.routing.routes import (
    RoutePattern, RouteTable, DEFAULT_ROUTES, normalize_fragment, parse_pattern,
)
from restaurant_directory.routing.location import Location
from restaurant_directory.routing.router import Router

__all__ = [
    "View", "HomeView", "AreaView", "RestaurantDetailView", "SearchView", "NotFoundView",
    "RoutePattern", "RouteTable", "DEFAULT_ROUTES", "normalize_fragment", "parse_pattern",
    "Location", "Router",
]
