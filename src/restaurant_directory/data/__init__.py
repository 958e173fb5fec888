"""Data layer: record models, area classification, search index and the record store."""

from restaurant_directory.data.models import (
    Restaurant, AreaGroup, AreaSummary, DirectoryStats, WEEKDAYS,
)
from restaurant_directory.data.areas import (
    DEFAULT_AREA_GROUPS, FALLBACK_AREA_ID, classify, validate_groups,
)
from restaurant_directory.data.search import SearchIndex, SearchEntry
from restaurant_directory.data.store import RecordStore, AreaListing
from restaurant_directory.data.source import load_raw_collection

__all__ = [
    "Restaurant", "AreaGroup", "AreaSummary", "DirectoryStats", "WEEKDAYS",
    "DEFAULT_AREA_GROUPS", "FALLBACK_AREA_ID", "classify", "validate_groups",
    "SearchIndex", "SearchEntry",
    "RecordStore", "AreaListing",
    "load_raw_collection",
]
