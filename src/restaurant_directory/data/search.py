"""Substring search index over restaurant name, category and address."""

from collections.abc import Iterable
from dataclasses import dataclass

from restaurant_directory.data.models import Restaurant


SEARCH_FIELDS = ("name", "category", "address")


@dataclass(frozen=True, slots=True)
class SearchEntry:
    restaurant_id: int
    text: str


def build_search_text(restaurant: Restaurant) -> str:
    return " ".join(str(getattr(restaurant, field) or "") for field in SEARCH_FIELDS).lower()


class SearchIndex:
    """
    Built once from the loaded collection; never updated afterwards.

    Entries keep collection order so results come back in listing order.
    """

    def __init__(self, restaurants: Iterable[Restaurant]):
        self._entries: tuple[SearchEntry, ...] = tuple(
            SearchEntry(restaurant_id=r.id, text=build_search_text(r)) for r in restaurants
        )

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[SearchEntry, ...]:
        return self._entries

    def query(self, text: str) -> list[int]:
        """Ids whose indexed text contains ``text`` (case-insensitive). Blank queries match nothing."""
        needle = (text or "").strip().lower()
        if not needle:
            return []
        return [entry.restaurant_id for entry in self._entries if needle in entry.text]
