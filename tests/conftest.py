"""
Shared fixtures: a small, fully-specified restaurant collection and a
store loaded from it.
"""

import pytest

from restaurant_directory.data.store import RecordStore
from restaurant_directory.rendering.renderer import Renderer


SAMPLE_RECORDS = [
    {
        "id": 1,
        "name": "Rita's Dining Room",
        "category": "American",
        "address": "49 Blackstock Road, London N4 2JF",
        "postcode": "N4 2JF",
        "rating": 4.5,
        "review_count": 212,
        "image_url": "img/1.jpg",
        "working_hours": {"Monday": "Closed", "Tuesday": "5:30 pm - 11:00 pm"},
        "amenities": {"service": {"takeaway": True, "delivery": False}},
        "external_url": "https://maps.example.com/ritas",
        "website": "https://ritas.example.com",
    },
    {
        "id": 2,
        "name": "Portobello Pho",
        "category": "Vietnamese",
        "address": "214 Portobello Road, London W11 1LJ",
        "rating": 4.0,
        "review_count": 98,
    },
    {
        "name": "Smithfield Grill",
        "category": "British",
        "address": "12 Charterhouse Street, London EC1M 6HA",
        "rating": 3.5,
    },
    {
        "name": "Brick Lane Biryani House",
        "category": "Indian",
        "address": "98 Brick Lane, London E1 6RL",
    },
]


@pytest.fixture
def sample_records():
    """A fresh copy of the sample collection."""
    return [dict(r) for r in SAMPLE_RECORDS]


@pytest.fixture
def store(sample_records):
    """A RecordStore loaded with the sample collection."""
    s = RecordStore()
    s.load(sample_records)
    return s


@pytest.fixture
def renderer():
    """Renderer with a fixed theme set so output doesn't depend on env vars."""
    return Renderer(themes=["theme-a", "theme-b", "theme-c"], site_title="Test Directory")
