"""
Area groups and the postcode → area classifier.

Groups are checked in priority order; the first explicit group holding a
prefix of the postcode wins and anything left over falls into the single
fallback group. The classifier is a pure function so it can be exercised
without building a store.
"""

from collections.abc import Sequence

from restaurant_directory.data.models import AreaGroup
from restaurant_directory.data.postcodes import compact_postcode
from restaurant_directory.exceptions import ConfigurationError


def _districts(*areas: str) -> tuple[str, ...]:
    """Expand postcode areas into their single-digit district prefixes: 'N' → N1..N9."""
    return tuple(f"{area}{digit}" for area in areas for digit in range(1, 10))


# Central first: EC/WC would otherwise be claimed by E and W districts.
DEFAULT_AREA_GROUPS: tuple[AreaGroup, ...] = (
    AreaGroup(id="central-london", name="Central London", prefixes=("EC", "WC")),
    AreaGroup(id="north-london", name="North London", prefixes=_districts("N", "NW")),
    AreaGroup(id="east-london", name="East London", prefixes=_districts("E")),
    AreaGroup(id="south-london", name="South London", prefixes=_districts("SE", "SW")),
    AreaGroup(id="west-london", name="West London", prefixes=_districts("W")),
    AreaGroup(id="other", name="Further Afield", is_fallback=True),
)

FALLBACK_AREA_ID = "other"


def validate_groups(groups: Sequence[AreaGroup]) -> tuple[AreaGroup, ...]:
    """
    Check a set of group definitions before they are used.

    Raises:
        ConfigurationError: on duplicate ids or anything other than exactly
            one fallback group.
    """
    groups = tuple(groups)
    ids = [g.id for g in groups]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ConfigurationError(
            f"Duplicate area ids: {', '.join(duplicates)}",
            details={"duplicates": duplicates},
        )
    fallbacks = [g.id for g in groups if g.is_fallback]
    if len(fallbacks) != 1:
        raise ConfigurationError(
            f"Exactly one fallback area is required, found {len(fallbacks)}",
            details={"fallbacks": fallbacks},
        )
    return groups


def fallback_group(groups: Sequence[AreaGroup]) -> AreaGroup:
    for group in groups:
        if group.is_fallback:
            return group
    raise ConfigurationError("No fallback area defined")


def classify(postcode: str, groups: Sequence[AreaGroup] = DEFAULT_AREA_GROUPS) -> str:
    """
    Map a postcode to exactly one area id.

    Matching ignores case and whitespace on both sides. Explicit groups are
    tried in the order given, skipping the fallback wherever it sits; when
    none matches the fallback id is returned.

    Args:
        postcode: Any string: malformed codes simply land in the fallback.
        groups: Area definitions in priority order.

    Returns:
        The id of the matching area group.
    """
    code = compact_postcode(postcode or "")
    for group in groups:
        if group.is_fallback:
            continue
        for prefix in group.prefixes:
            key = compact_postcode(prefix)
            if key and code.startswith(key):
                return group.id
    return fallback_group(groups).id
