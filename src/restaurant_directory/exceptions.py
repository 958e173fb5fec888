"""
Custom exception hierarchy for the Restaurant Directory.

Provides specific exception types for each subsystem,
enabling targeted error handling throughout the application.
Only DataLoadError is ever surfaced to the user; everything else is
contained by the component that detects it.
"""


class RestaurantDirectoryError(Exception):
    """Base exception for all Restaurant Directory errors."""

    def __init__(self, message: str = "", details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# --- Loading Exceptions ---


class DataLoadError(RestaurantDirectoryError):
    """Raised when the collection cannot be loaded at all (fatal at startup)."""
    pass


class DataSourceError(DataLoadError):
    """Raised when the static document cannot be fetched or parsed."""
    pass


class RecordValidationWarning(RestaurantDirectoryError):
    """
    A single record failed validation and was dropped.

    Never raised out of RecordStore.load: instances are collected on
    the store and logged.
    """

    def __init__(self, index: int, reason: str, record_id: object = None):
        super().__init__(
            message=f"Record #{index} dropped: {reason}",
            details={"index": index, "reason": reason, "record_id": record_id},
        )
        self.index = index
        self.reason = reason


# --- Lookup Exceptions ---


class NotFoundError(RestaurantDirectoryError):
    """Base exception for lookups that find nothing."""
    pass


class RestaurantNotFoundError(NotFoundError):
    """Raised when a restaurant id is not in the store."""

    def __init__(self, restaurant_id: int):
        super().__init__(
            message=f"Restaurant {restaurant_id} not found",
            details={"restaurant_id": restaurant_id},
        )


class AreaNotFoundError(NotFoundError):
    """Raised when an area id is not one of the configured groups."""

    def __init__(self, area_id: str):
        super().__init__(
            message=f"Area '{area_id}' not found",
            details={"area_id": area_id},
        )


# --- Routing Exceptions ---


class RoutingError(RestaurantDirectoryError):
    """Base exception for router errors."""
    pass


class RouteUnmatchedError(RoutingError):
    """No route pattern matched a fragment. Mapped to the not-found view."""

    def __init__(self, fragment: str):
        super().__init__(
            message=f"No route matches fragment '{fragment}'",
            details={"fragment": fragment},
        )


class RouterError(RoutingError):
    """Raised when the router is misused (e.g. started twice)."""
    pass


# --- Configuration Exceptions ---


class ConfigurationError(RestaurantDirectoryError):
    """Raised for invalid area group definitions or route tables."""
    pass
