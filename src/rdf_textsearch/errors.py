"""Exceptions raised by text search datasets and indexes."""


class TextSearchError(Exception):
    """Base class for rdf-textsearch errors."""


class ConfigurationError(TextSearchError, ValueError):
    """Raised when a dataset is built without any field definitions."""


class UnknownIndexError(TextSearchError, KeyError):
    """Raised when a search targets an index name that was never registered."""

    def __init__(self, index_name: str, available: list[str] | None = None) -> None:
        self.index_name = index_name
        self.available = sorted(available or [])
        super().__init__(index_name)

    def __str__(self) -> str:
        known = ", ".join(repr(name) for name in self.available) or "none"
        return f"Unknown text index {self.index_name!r} (registered: {known})"
