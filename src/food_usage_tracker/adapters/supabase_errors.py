"""Translation of Supabase client failures into domain errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from postgrest.exceptions import APIError

from food_usage_tracker.domain.errors import (
    DuplicateFoodError,
    StoreRejectedError,
    StoreUnavailableError,
)

UNIQUE_VIOLATION = "23505"


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Raise domain errors for PostgREST rejections and transport failures."""
    try:
        yield
    except APIError as exc:
        if exc.code == UNIQUE_VIOLATION:
            raise DuplicateFoodError(exc.message or "duplicate key") from exc
        raise StoreRejectedError(f"{action} failed: {exc.message}") from exc
    except httpx.HTTPError as exc:
        raise StoreUnavailableError(f"{action} failed: {exc}") from exc
