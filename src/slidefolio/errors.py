"""Exception types raised by slidefolio."""


class SlidefolioError(Exception):
    """Base class for all slidefolio errors."""


class IngestionError(SlidefolioError):
    """A single file could not be copied into managed storage."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Failed to ingest {name}: {reason}")
        self.name = name
        self.reason = reason


class TabularReadError(SlidefolioError):
    """The tabular file could not be read into row records."""


class PersistenceError(SlidefolioError):
    """The folder store could not be read or written."""
