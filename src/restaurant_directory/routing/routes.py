"""
Ordered route table with typed placeholder segments.

Patterns look like ``/restaurant/{restaurant_id:int}``: static segments
must match exactly, and at most one placeholder is allowed per pattern.
The first pattern that matches structurally *and* whose placeholder
converts cleanly wins.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from urllib.parse import unquote

from restaurant_directory.exceptions import ConfigurationError, RouteUnmatchedError
from restaurant_directory.routing.views import (
    AreaView,
    HomeView,
    RestaurantDetailView,
    SearchView,
    View,
)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError("id must be positive")
    return number


# (regex_pattern, converter) for each supported placeholder type
CONVERTERS: dict[str, tuple[str, Callable[[str], object]]] = {
    "slug": (r"[A-Za-z0-9-]+", str.lower),
    "int": (r"\d+", _positive_int),
    "text": (r".+", unquote),
}

_PLACEHOLDER = re.compile(r"^\{(?P<name>[a-z_][a-z0-9_]*)(?::(?P<type>[a-z]+))?\}$")


def normalize_fragment(fragment: str | None) -> str:
    """
    Turn a raw fragment into a route path.

    ``None``, ``""``, ``"#"`` and ``"#/"`` all become ``"/"``; a missing
    leading slash is added and one trailing slash after a non-empty
    segment is dropped. ``"#//"`` stays ``"//"`` and matches nothing.
    """
    path = (fragment or "").strip()
    if path.startswith("#"):
        path = path[1:]
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1 and path.endswith("/") and not path.endswith("//"):
        path = path[:-1]
    return path


def _split(path: str) -> list[str]:
    return [] if path == "/" else path[1:].split("/")


@dataclass(frozen=True, slots=True)
class PathSegment:
    """Static (``area``) or placeholder (``{area_id:slug}``) segment."""

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "text"


@dataclass(frozen=True)
class RoutePattern:
    """One entry of the route table: a path pattern plus the view it builds."""

    pattern: str
    view_factory: Callable[..., View]
    name: str = ""

    def __post_init__(self) -> None:
        segments = parse_pattern(self.pattern)
        if sum(1 for s in segments if s.is_param) > 1:
            raise ConfigurationError(
                f"Route '{self.pattern}' has more than one placeholder",
                details={"pattern": self.pattern},
            )
        object.__setattr__(self, "_segments", tuple(segments))

    @property
    def segments(self) -> tuple[PathSegment, ...]:
        return self._segments  # type: ignore[attr-defined]

    def match(self, path: str) -> View | None:
        """Build the view for ``path``, or None when this pattern does not apply."""
        parts = _split(path)
        if len(parts) != len(self.segments):
            return None
        params: dict[str, object] = {}
        for part, segment in zip(parts, self.segments):
            if not segment.is_param:
                if part != segment.value:
                    return None
                continue
            regex, convert = CONVERTERS[segment.param_type]
            if not re.fullmatch(regex, part):
                return None
            try:
                params[segment.param_name] = convert(part)
            except ValueError:
                return None
        return self.view_factory(**params)


def parse_pattern(pattern: str) -> list[PathSegment]:
    """
    Parse a route pattern into segments.

    Examples::

        "/"                        -> []
        "/area/{area_id:slug}"     -> [PathSegment("area"), PathSegment(..., is_param=True, param_type="slug")]
    """
    segments: list[PathSegment] = []
    for part in _split(normalize_fragment(pattern)):
        found = _PLACEHOLDER.match(part)
        if found is None:
            if "{" in part or "}" in part:
                raise ConfigurationError(f"Malformed placeholder '{part}' in route '{pattern}'")
            segments.append(PathSegment(value=part))
            continue
        param_type = found.group("type") or "text"
        if param_type not in CONVERTERS:
            raise ConfigurationError(
                f"Unknown placeholder type '{param_type}' in route '{pattern}'",
                details={"pattern": pattern, "type": param_type},
            )
        segments.append(
            PathSegment(value=part, is_param=True, param_name=found.group("name"), param_type=param_type)
        )
    return segments


class RouteTable:
    """Ordered list of route patterns; earlier entries take priority."""

    def __init__(self, routes: Sequence[RoutePattern]):
        self._routes = tuple(routes)

    def __iter__(self):
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def match(self, fragment: str | None) -> View:
        """
        Resolve a fragment to a view.

        Raises:
            RouteUnmatchedError: if no pattern accepts the fragment.
        """
        path = normalize_fragment(fragment)
        for route in self._routes:
            view = route.match(path)
            if view is not None:
                return view
        raise RouteUnmatchedError(fragment or "")


DEFAULT_ROUTES = RouteTable([
    RoutePattern("/", HomeView, name="home"),
    RoutePattern("/area/{area_id:slug}", AreaView, name="area"),
    RoutePattern("/restaurant/{restaurant_id:int}", RestaurantDetailView, name="restaurant"),
    RoutePattern("/search/{query:text}", SearchView, name="search"),
])
