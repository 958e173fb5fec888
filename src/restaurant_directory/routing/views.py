"""The closed set of views the router can resolve a fragment to."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class HomeView:
    pass


@dataclass(frozen=True, slots=True)
class AreaView:
    area_id: str


@dataclass(frozen=True, slots=True)
class RestaurantDetailView:
    restaurant_id: int


@dataclass(frozen=True, slots=True)
class SearchView:
    query: str


@dataclass(frozen=True, slots=True)
class NotFoundView:
    fragment: str = ""


View = Union[HomeView, AreaView, RestaurantDetailView, SearchView, NotFoundView]
