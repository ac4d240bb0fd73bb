"""Readable messages for technical errors shown to catalog and usage users."""

from food_usage_tracker.domain.errors import (
    DuplicateFoodError,
    FoodValidationError,
    SpreadsheetFormatError,
)

MAX_MESSAGE_LENGTH = 100
DUPLICATE_MESSAGE = "This food already exists in the catalog."
MISSING_FILE_MESSAGE = "The file was not found. It may have been moved or deleted."
FILE_ACCESS_MESSAGE = "The file cannot be accessed. Check its read permissions."

# Ordered: the first matching fragment wins.
_MESSAGE_FRAGMENTS: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("duplicate key", "unique constraint", "23505"),
        DUPLICATE_MESSAGE,
    ),
    (
        ("foreign key",),
        "The row refers to a category that does not exist. Check the related lists.",
    ),
    (
        ("check constraint",),
        "A value does not satisfy the catalog rules. Check the entered values.",
    ),
    (
        ("not-null constraint", "not null constraint", "null value in column"),
        "A required value is missing. Fill in every required column.",
    ),
    (
        ("enoent", "no such file"),
        MISSING_FILE_MESSAGE,
    ),
    (
        ("eacces", "permission denied"),
        FILE_ACCESS_MESSAGE,
    ),
    (
        ("file is locked", "in use by", "used by another process"),
        "The file is used by another application. Close it before importing.",
    ),
    (
        ("invalid number", "could not convert"),
        "A numeric cell is invalid. Check the calorie and ratio columns.",
    ),
    (
        ("invalid date",),
        "A date cell is invalid. Use the YYYY-MM-DD format.",
    ),
    (
        ("out of memory", "too large"),
        "The file is too large. Try again with a smaller file.",
    ),
)


def user_friendly_message(exc: BaseException) -> str:
    """Translate an exception into a message suitable for end users."""
    if isinstance(exc, FoodValidationError | SpreadsheetFormatError):
        return str(exc)
    if isinstance(exc, DuplicateFoodError):
        return DUPLICATE_MESSAGE
    if isinstance(exc, FileNotFoundError):
        return MISSING_FILE_MESSAGE
    if isinstance(exc, PermissionError):
        return FILE_ACCESS_MESSAGE

    message = str(exc)
    lowered = message.lower()
    for fragments, friendly in _MESSAGE_FRAGMENTS:
        if any(fragment in lowered for fragment in fragments):
            return friendly
    if len(message) > MAX_MESSAGE_LENGTH:
        return f"Processing error: {message[:MAX_MESSAGE_LENGTH]}..."
    return f"Error: {message}"
