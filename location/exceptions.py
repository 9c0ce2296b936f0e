class LocationFilterError(Exception):
    """Base class for errors raised while filtering locations."""


class UnsupportedFilterKey(LocationFilterError):
    """A filter lookup that the Location model cannot evaluate."""

    def __init__(self, key: str, message: str = ""):
        self.key = key
        super().__init__(message or f"Unsupported filter key: {key!r}")


class InvalidFilterValue(LocationFilterError):
    """A filter value that cannot be coerced to the looked-up field's type."""

    def __init__(self, key: str, value, message: str = ""):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid value {value!r} for filter {key!r}")


class DependencyUnavailable(LocationFilterError):
    """The database could not be reached while reading locations."""
