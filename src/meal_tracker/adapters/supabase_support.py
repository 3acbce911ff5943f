"""Helpers shared by the Supabase repositories."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from postgrest.exceptions import APIError

from meal_tracker.errors import ConflictError, StoreError

_logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def execute(
    query: Any,
    action: str,
    on_conflict: Callable[[], ConflictError] | None = None,
) -> Any:
    """Run a PostgREST query, translating API errors into store errors."""
    try:
        return query.execute()
    except APIError as exc:
        if exc.code == UNIQUE_VIOLATION:
            raise (on_conflict or _default_conflict)() from exc
        _logger.exception(
            "Supabase request failed: action=%s code=%s", action, exc.code
        )
        raise StoreError(f"Failed to {action}: {exc.message}") from exc


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, returning aware UTC datetimes."""
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, str) and raw:
        parsed = datetime.fromisoformat(raw)
    else:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards, including the PostgREST `*` alias, in a value."""
    for char in ("\\", "%", "_", "*"):
        value = value.replace(char, f"\\{char}")
    return value


def _default_conflict() -> ConflictError:
    return ConflictError("Record already exists")
