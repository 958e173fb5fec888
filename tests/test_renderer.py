"""
Tests for the template renderer.

Rendering is checked through its output markup: the structural classes
the templates emit, escaping, placeholder markers and determinism.
"""

import re

import pytest

from restaurant_directory.data.store import RecordStore
from restaurant_directory.rendering.renderer import (
    PLACEHOLDER_CLASS,
    Renderer,
    format_rating,
    humanize,
    theme_for_position,
)
from restaurant_directory.routing.views import (
    AreaView,
    HomeView,
    NotFoundView,
    RestaurantDetailView,
    SearchView,
)

PLACEHOLDER_MARKER = f'class="{PLACEHOLDER_CLASS}"'
ARTIFACTS = re.compile(r"\b(None|undefined|null)\b")


def _themes_in(markup):
    return re.findall(r'class="restaurant-card (theme-[a-z])"', markup)


class TestHelpers:
    """Pure helper functions."""

    def test_theme_rotation(self):
        themes = ("a", "b", "c")
        assert [theme_for_position(i, themes) for i in range(7)] == ["a", "b", "c", "a", "b", "c", "a"]

    def test_format_rating(self):
        assert format_rating(4) == "4.0"
        assert format_rating(None) == "0.0"
        assert format_rating(3.25) == "3.2"

    def test_humanize(self):
        assert humanize("wheelchair_accessible") == "Wheelchair accessible"
        assert humanize("step-free") == "Step free"

    def test_requires_a_theme(self):
        with pytest.raises(ValueError):
            Renderer(themes=[])


class TestHome:
    """Home listing."""

    def test_lists_every_record(self, store, renderer):
        html = renderer.render(HomeView(), store)
        for record in store.records:
            assert f'href="#/restaurant/{record.id}"' in html
        assert "Test Directory" in html
        assert "4 restaurants" in html

    def test_area_nav_with_counts(self, store, renderer):
        html = renderer.render(HomeView(), store)
        assert 'href="#/area/north-london"' in html
        assert 'href="#/area/other"' in html

    def test_card_themes_rotate_by_position(self, store, renderer):
        html = renderer.render(HomeView(), store)
        assert _themes_in(html) == ["theme-a", "theme-b", "theme-c", "theme-a"]

    def test_empty_store(self, renderer):
        store = RecordStore()
        store.load([])
        html = renderer.render(HomeView(), store)
        assert "0 restaurants" in html
        assert PLACEHOLDER_MARKER in html

    def test_escapes_names(self, renderer):
        store = RecordStore()
        store.load([{"name": "<script>alert(1)</script>", "address": "1 Road, London N4 1AA"}])
        html = renderer.render(HomeView(), store)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestArea:
    """Area listing."""

    def test_lists_only_members(self, store, renderer):
        html = renderer.render(AreaView("central-london"), store)
        assert "Central London" in html
        assert "Smithfield Grill" in html
        assert "Portobello Pho" not in html
        assert "1 restaurant" in html

    def test_theme_restarts_per_listing(self, store, renderer):
        """Themes come from position in the rendered listing, not the collection."""
        html = renderer.render(AreaView("east-london"), store)
        assert _themes_in(html) == ["theme-a"]

    def test_empty_area(self, store, renderer):
        html = renderer.render(AreaView("south-london"), store)
        assert "South London" in html
        assert PLACEHOLDER_MARKER in html

    def test_unknown_area_renders_not_found(self, store, renderer):
        html = renderer.render(AreaView("atlantis"), store)
        assert "view--not-found" in html
        assert "Area not found" in html


class TestRestaurantDetail:
    """Detail view."""

    def test_full_record(self, store, renderer):
        html = renderer.render(RestaurantDetailView(1), store)
        assert "Rita&#39;s Dining Room" in html
        assert "North London" in html
        assert 'src="img/1.jpg"' in html
        assert "5:30 pm - 11:00 pm" in html
        assert "Takeaway" in html
        assert "amenity--no" in html
        assert 'href="https://maps.example.com/ritas"' in html
        assert 'href="https://ritas.example.com"' in html
        assert "4.5" in html
        assert "212 reviews" in html

    def test_missing_hours_renders_placeholder(self, store, renderer):
        """A record without working_hours shows the placeholder and no null-ish artifacts."""
        html = renderer.render_restaurant_detail(store, 2)
        hours_section = html.split('class="restaurant__hours"')[1].split("</section>")[0]
        assert "<table" not in hours_section
        assert PLACEHOLDER_MARKER in hours_section
        assert not ARTIFACTS.search(html)

    def test_every_optional_field_absent(self, renderer):
        """A bare record renders placeholders for image, hours, amenities and links."""
        store = RecordStore()
        store.load([{"name": "Bare", "address": "1 Road, London N4 1AA"}])
        html = renderer.render_restaurant_detail(store, 1)

        for section, closing in [
            ("restaurant__image", "</figure>"),
            ("restaurant__hours", "</section>"),
            ("restaurant__amenities", "</section>"),
        ]:
            chunk = html.split(f'class="{section}"')[1].split(closing)[0]
            assert PLACEHOLDER_MARKER in chunk, section
        assert "No map link" in html
        assert "No website" in html
        assert "<img" not in html
        assert not ARTIFACTS.search(html)

    def test_script_urls_never_become_links(self, renderer):
        """Non-http links and image sources render as placeholders."""
        store = RecordStore()
        store.load([{
            "name": "Sketchy",
            "address": "1 Road, London N4 1AA",
            "website": "javascript:alert(1)",
            "external_url": "data:text/html,<b>x</b>",
            "image_url": "javascript:alert(2)",
        }])
        html = renderer.render_restaurant_detail(store, 1)
        assert "javascript:" not in html
        assert "data:text" not in html
        assert "No website" in html
        assert "No map link" in html
        assert "<img" not in html

    def test_partial_hours_mark_missing_days(self, store, renderer):
        html = renderer.render_restaurant_detail(store, 1)
        assert "Not listed" in html
        assert "Wednesday" in html

    def test_unknown_id_renders_not_found(self, store, renderer):
        html = renderer.render(RestaurantDetailView(999), store)
        assert "Restaurant not found" in html
        assert "view--restaurant" not in html


class TestSearch:
    """Search results view."""

    def test_echoes_query_and_count(self, store, renderer):
        html = renderer.render(SearchView("pho"), store)
        assert '<span class="search-query">pho</span>' in html
        assert 'data-count="1"' in html
        assert "1 result" in html
        assert "Portobello Pho" in html

    def test_zero_results(self, store, renderer):
        html = renderer.render(SearchView("sushi"), store)
        assert 'data-count="0"' in html
        assert "0 results" in html
        assert "No restaurants match your search." in html

    def test_blank_query_is_zero_results(self, store, renderer):
        html = renderer.render(SearchView("   "), store)
        assert 'data-count="0"' in html

    def test_query_is_escaped(self, store, renderer):
        html = renderer.render(SearchView('<img src=x onerror="x">'), store)
        assert "<img src=x" not in html
        assert "&lt;img" in html


class TestNotFoundAndErrors:
    """Fallback fragments."""

    def test_not_found_view(self, store, renderer):
        html = renderer.render(NotFoundView("#/nowhere"), store)
        assert "Page not found" in html
        assert 'href="#/"' in html

    def test_load_error(self, renderer):
        html = renderer.render_load_error()
        assert "view--load-error" in html
        assert 'role="alert"' in html

    def test_unknown_view_type(self, store, renderer):
        assert "view--not-found" in renderer.render(object(), store)


class TestDeterminism:
    """Same inputs, same bytes."""

    @pytest.mark.parametrize(
        "view",
        [HomeView(), AreaView("north-london"), RestaurantDetailView(1), SearchView("london"), NotFoundView("#/x")],
    )
    def test_repeatable(self, store, renderer, view):
        assert renderer.render(view, store) == renderer.render(view, store)

    def test_separate_renderers_agree(self, store):
        a = Renderer(themes=["t1", "t2"], site_title="Same")
        b = Renderer(themes=["t1", "t2"], site_title="Same")
        assert a.render(HomeView(), store) == b.render(HomeView(), store)

    def test_render_does_not_mutate_store(self, store, renderer):
        before = (store.records, store.stats())
        for view in [HomeView(), AreaView("west-london"), RestaurantDetailView(1), SearchView("a")]:
            renderer.render(view, store)
        assert (store.records, store.stats()) == before
