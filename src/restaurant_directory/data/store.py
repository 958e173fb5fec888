"""
RecordStore: the loaded collection and every index derived from it.

Usage:
    store = RecordStore()
    warnings = store.load(raw_records)
    store.get_by_id(3)
    list(store.list_by_area("west-london"))
"""

from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from restaurant_directory.data.areas import DEFAULT_AREA_GROUPS, classify, validate_groups
from restaurant_directory.data.models import AreaGroup, AreaSummary, DirectoryStats, Restaurant
from restaurant_directory.data.search import SearchIndex
from restaurant_directory.exceptions import (
    AreaNotFoundError,
    DataLoadError,
    RecordValidationWarning,
    RestaurantNotFoundError,
)
from restaurant_directory.logging_config import get_logger

logger = get_logger(__name__)


class AreaListing:
    """
    Lazy, restartable view of one area's restaurants.

    Every iteration walks the collection again, so the same listing can
    be consumed any number of times.
    """

    def __init__(self, area: AreaGroup, records: Sequence[Restaurant], member_ids: frozenset[int]):
        self.area = area
        self._records = records
        self._member_ids = member_ids

    def __iter__(self) -> Iterator[Restaurant]:
        return (r for r in self._records if r.id in self._member_ids)

    def __len__(self) -> int:
        return len(self._member_ids)

    def __repr__(self) -> str:
        return f"<AreaListing(area='{self.area.id}', members={len(self)})>"


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ())) or "record"
        parts.append(f"{loc}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


def _explicit_id(value: Any) -> int:
    """Coerce a source id to a positive int, raising ValueError otherwise."""
    if isinstance(value, bool):
        raise ValueError("id must be an integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        raise ValueError("id must be an integer")
    if number <= 0:
        raise ValueError("id must be positive")
    return number


class RecordStore:
    """
    Read-only restaurant collection plus derived indexes.

    ``load`` may be called exactly once. Afterwards the collection, the
    id map, area membership and the search index never change.
    """

    def __init__(self, area_groups: Sequence[AreaGroup] = DEFAULT_AREA_GROUPS):
        self._groups: tuple[AreaGroup, ...] = validate_groups(area_groups)
        self._groups_by_id: Mapping[str, AreaGroup] = MappingProxyType({g.id: g for g in self._groups})
        self._records: tuple[Restaurant, ...] = ()
        self._by_id: Mapping[int, Restaurant] = MappingProxyType({})
        self._members: Mapping[str, frozenset[int]] = MappingProxyType(
            {g.id: frozenset() for g in self._groups}
        )
        self._search_index = SearchIndex(())
        self._warnings: tuple[RecordValidationWarning, ...] = ()
        self._loaded = False

    # --- Loading ---

    def load(self, raw_collection: Any) -> list[RecordValidationWarning]:
        """
        Validate raw records and build every index.

        Bad records are dropped with a RecordValidationWarning rather than
        failing the whole load.

        Returns:
            The warnings recorded for dropped records.

        Raises:
            DataLoadError: if the input is not a sequence of records or the
                store has already been loaded.
        """
        if self._loaded:
            raise DataLoadError("RecordStore has already been loaded")
        if not isinstance(raw_collection, Sequence) or isinstance(raw_collection, (str, bytes, bytearray)):
            raise DataLoadError(
                f"Expected a sequence of records, got {type(raw_collection).__name__}",
                details={"type": type(raw_collection).__name__},
            )

        warnings: list[RecordValidationWarning] = []
        kept: list[tuple[Restaurant, bool]] = []
        seen_ids: set[int] = set()

        def drop(index: int, reason: str, record_id: object = None) -> None:
            warning = RecordValidationWarning(index, reason, record_id=record_id)
            logger.warning("%s", warning.message)
            warnings.append(warning)

        for index, item in enumerate(raw_collection):
            if not isinstance(item, Mapping):
                drop(index, f"expected an object, got {type(item).__name__}")
                continue

            raw_id = item.get("id")
            explicit: int | None = None
            if raw_id is not None:
                try:
                    explicit = _explicit_id(raw_id)
                except ValueError as e:
                    drop(index, str(e), record_id=raw_id)
                    continue

            # Missing ids get a placeholder here and a real id once the max is known.
            try:
                record = Restaurant.model_validate({**item, "id": explicit or 1})
            except ValidationError as e:
                drop(index, _format_validation_error(e), record_id=raw_id)
                continue

            if explicit is not None:
                if explicit in seen_ids:
                    drop(index, f"duplicate id {explicit}", record_id=explicit)
                    continue
                seen_ids.add(explicit)
            kept.append((record, explicit is None))

        next_id = max(seen_ids, default=0) + 1
        records: list[Restaurant] = []
        for record, needs_id in kept:
            if needs_id:
                record = record.model_copy(update={"id": next_id})
                next_id += 1
            records.append(record)

        self._build_indexes(records)
        self._warnings = tuple(warnings)
        self._loaded = True

        logger.info(
            "Loaded %d restaurants (%d dropped) across %d areas",
            len(self._records), len(warnings), len(self._groups),
        )
        return warnings

    def _build_indexes(self, records: list[Restaurant]) -> None:
        members: dict[str, set[int]] = {g.id: set() for g in self._groups}
        for record in records:
            members[classify(record.postcode, self._groups)].add(record.id)

        self._records = tuple(records)
        self._by_id = MappingProxyType({r.id: r for r in records})
        self._members = MappingProxyType({area_id: frozenset(ids) for area_id, ids in members.items()})
        self._search_index = SearchIndex(self._records)

    # --- Read API ---

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def records(self) -> tuple[Restaurant, ...]:
        return self._records

    @property
    def warnings(self) -> tuple[RecordValidationWarning, ...]:
        return self._warnings

    @property
    def area_groups(self) -> tuple[AreaGroup, ...]:
        return self._groups

    @property
    def search_index(self) -> SearchIndex:
        return self._search_index

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, restaurant_id: object) -> bool:
        return restaurant_id in self._by_id

    def get_by_id(self, restaurant_id: int) -> Restaurant:
        """Raises RestaurantNotFoundError if the id is unknown."""
        try:
            return self._by_id[restaurant_id]
        except (KeyError, TypeError):
            raise RestaurantNotFoundError(restaurant_id) from None

    def _group(self, area_id: str) -> AreaGroup:
        try:
            return self._groups_by_id[area_id]
        except (KeyError, TypeError):
            raise AreaNotFoundError(area_id) from None

    def get_area_by_id(self, area_id: str) -> AreaSummary:
        """Area metadata plus member count. Raises AreaNotFoundError."""
        group = self._group(area_id)
        return AreaSummary(area=group, member_count=len(self._members[group.id]))

    def areas(self) -> list[AreaSummary]:
        """Every area in priority order, empty ones included."""
        return [AreaSummary(area=g, member_count=len(self._members[g.id])) for g in self._groups]

    def list_by_area(self, area_id: str) -> AreaListing:
        """Restaurants in one area, in collection order. Raises AreaNotFoundError."""
        group = self._group(area_id)
        return AreaListing(group, self._records, self._members[group.id])

    def area_of(self, restaurant_id: int) -> AreaGroup:
        """The area a loaded restaurant belongs to. Raises RestaurantNotFoundError."""
        self.get_by_id(restaurant_id)
        for group in self._groups:
            if restaurant_id in self._members[group.id]:
                return group
        raise RestaurantNotFoundError(restaurant_id)

    def search(self, query: str) -> tuple[Restaurant, ...]:
        """
        Case-insensitive substring search over name, category and address.

        An empty or whitespace-only query returns no results, not the
        whole collection.
        """
        return tuple(self._by_id[i] for i in self._search_index.query(query))

    def stats(self) -> DirectoryStats:
        """Total count, per-area counts and mean rating (0.0 when empty)."""
        total = len(self._records)
        average = sum(r.rating for r in self._records) / total if total else 0.0
        return DirectoryStats(
            total=total,
            per_area={g.id: len(self._members[g.id]) for g in self._groups},
            average_rating=average,
        )
