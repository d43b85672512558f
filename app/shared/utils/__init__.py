"""Shared utilities: datetime helpers."""

from app.shared.utils.datetime import (
    ensure_utc,
    from_timestamp_utc,
    utc_now,
)

__all__ = [
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
]
