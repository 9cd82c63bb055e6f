"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def coerce_utc(value: datetime | None) -> datetime | None:
    """Return a UTC-normalized datetime, assuming naive values are already UTC."""

    if value is None:
        return None

    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)

    return value.astimezone(timezone.utc)


def parse_timestamp(value: str | None) -> float:
    """Return the POSIX timestamp of an ISO-8601 ``value``.

    Missing or unparseable values map to ``0`` so they order before every
    dated entry. Naive values are treated as UTC.
    """

    if not value:
        return 0.0

    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        logger.debug("ignoring unparseable match date %r", value)
        return 0.0

    return coerce_utc(parsed).timestamp()
