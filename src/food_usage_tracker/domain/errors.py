"""Domain error types."""


class FoodUsageError(Exception):
    """Base class for application errors."""


class DuplicateFoodError(FoodUsageError):
    """An active catalog entry with the same natural key already exists."""


class StoreUnavailableError(FoodUsageError):
    """The record store could not be reached."""


class SpreadsheetFormatError(FoodUsageError):
    """A spreadsheet does not have the expected format."""


class FoodNotFoundError(FoodUsageError):
    """A catalog entry id does not exist."""


class FoodValidationError(FoodUsageError):
    """A catalog row is missing a required value."""


class StoreRejectedError(FoodUsageError):
    """The record store refused a write."""
