"""
Pydantic models for the Restaurant Directory.

Every model is frozen: once the store has been loaded nothing in it
can be reassigned.
"""

from typing import Any, Optional
from urllib.parse import urlsplit

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from restaurant_directory.data.postcodes import (
    extract_postcode,
    normalize_postcode,
    outward_code,
)
from restaurant_directory.logging_config import get_logger

logger = get_logger(__name__)


WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

LINK_SCHEMES = ("http", "https")


def _checked_url(field: str, value: Any, allow_relative: bool = False) -> Optional[str]:
    """
    Keep ``value`` only if it is an absolute http(s) URL, or a relative
    path when ``allow_relative`` is set. Anything else (``javascript:``,
    ``data:``, ``//host``, non-strings) is logged and becomes None.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, str):
        url = value.strip()
        try:
            parts = urlsplit(url)
        except ValueError:
            parts = None
        if parts is not None:
            if parts.scheme.lower() in LINK_SCHEMES and parts.netloc:
                return url
            if allow_relative and not parts.scheme and not parts.netloc:
                return url
    logger.warning("Ignoring unsafe or malformed %s: %r", field, value)
    return None


# --- Directory Records ---


class Restaurant(BaseModel):
    """
    One directory entry.

    Accepts the loosely-shaped objects found in the static document:
    alternative key names (``cuisine_type``, ``reviews``, ``photograph``,
    ``operating_hours``, ``maps_url``) are read through aliases and a
    missing postcode is pulled out of the address when one is present.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    id: int = Field(gt=0)
    name: str = Field(min_length=1)
    category: str = Field(default="", validation_alias=AliasChoices("category", "cuisine_type"))
    address: str = Field(min_length=1)
    postcode: str = Field(min_length=1, validation_alias=AliasChoices("postcode", "postal_code"))
    rating: float = Field(default=0.0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0, validation_alias=AliasChoices("review_count", "reviews"))
    image_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("image_url", "photograph"))
    working_hours: Optional[dict[str, str]] = Field(
        default=None, validation_alias=AliasChoices("working_hours", "operating_hours")
    )
    amenities: Optional[dict[str, dict[str, bool]]] = None
    external_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("external_url", "maps_url"))
    website: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def fill_postcode_from_address(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("postcode") or data.get("postal_code"):
            return data
        found = extract_postcode(str(data.get("address") or ""))
        if found:
            return {**data, "postcode": found}
        return data

    @field_validator("category", mode="before")
    @classmethod
    def blank_category(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("rating", "review_count", mode="before")
    @classmethod
    def default_missing_numbers(cls, v: Any) -> Any:
        # Booleans are ints to Python but never a meaningful rating/count.
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        return 0 if v is None or v == "" else v

    @field_validator("postcode")
    @classmethod
    def normalize(cls, v: str) -> str:
        return normalize_postcode(v)

    @field_validator("image_url", mode="before")
    @classmethod
    def safe_image_source(cls, v: Any) -> Any:
        return _checked_url("image_url", v, allow_relative=True)

    @field_validator("external_url", "website", mode="before")
    @classmethod
    def safe_link_target(cls, v: Any, info: ValidationInfo) -> Any:
        return _checked_url(info.field_name, v)

    @field_validator("working_hours", mode="before")
    @classmethod
    def flatten_hours(cls, v: Any) -> Any:
        if not v:
            return None
        if not isinstance(v, dict):
            logger.warning("Ignoring working_hours of type %s", type(v).__name__)
            return None
        hours = {}
        for day, text in v.items():
            if isinstance(text, (list, tuple)):
                text = ", ".join(str(h) for h in text if h is not None)
            if isinstance(text, str) and text.strip():
                hours[str(day)] = text
            elif text not in (None, ""):
                logger.warning("Ignoring working_hours entry %r: %r", day, text)
        return hours or None

    @field_validator("amenities", mode="before")
    @classmethod
    def clean_amenities(cls, v: Any) -> Any:
        if not v:
            return None
        if not isinstance(v, dict):
            logger.warning("Ignoring amenities of type %s", type(v).__name__)
            return None
        groups = {}
        for group, flags in v.items():
            if not isinstance(flags, dict):
                logger.warning("Ignoring amenities group %r: %r", group, flags)
                continue
            kept = {str(name): enabled for name, enabled in flags.items() if isinstance(enabled, bool)}
            if len(kept) != len(flags):
                logger.warning("Ignoring non-boolean flags in amenities group %r", group)
            groups[str(group)] = kept
        return groups or None

    @property
    def outward_code(self) -> str:
        return outward_code(self.postcode)

    def hours_by_weekday(self) -> list[tuple[str, Optional[str]]]:
        """Opening hours in Monday-first order, then any non-standard keys in source order."""
        hours = self.working_hours or {}
        by_day = {day.strip().capitalize(): text for day, text in hours.items()}
        ordered: list[tuple[str, Optional[str]]] = [(day, by_day.get(day)) for day in WEEKDAYS]
        ordered.extend((day, text) for day, text in by_day.items() if day not in WEEKDAYS)
        return ordered

    def __repr__(self) -> str:
        return f"<Restaurant(id={self.id}, name='{self.name}', postcode='{self.postcode}')>"


# --- Area Groups ---


class AreaGroup(BaseModel):
    """A named partition of the directory by postcode prefix."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(pattern=r"^[a-z0-9][a-z0-9-]*$")
    name: str
    prefixes: tuple[str, ...] = ()
    is_fallback: bool = False


class AreaSummary(BaseModel):
    """Area metadata plus how many restaurants it holds."""

    model_config = ConfigDict(frozen=True)

    area: AreaGroup
    member_count: int = 0

    @property
    def id(self) -> str:
        return self.area.id

    @property
    def name(self) -> str:
        return self.area.name


class DirectoryStats(BaseModel):
    """Collection-wide figures reported by RecordStore.stats()."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    per_area: dict[str, int] = Field(default_factory=dict)
    average_rating: float = 0.0
