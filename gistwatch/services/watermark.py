"""Persisted "last successful run" timestamp.

The watermark is a single ISO-8601 timestamp with offset in a plain text
file. A missing file means no run has succeeded yet.
"""

import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Callable

from gistwatch.errors import StoreReadError, StoreWriteError, TimestampParseError
from gistwatch.utils import ensure_aware, parse_timestamp

LOG = logging.getLogger("gistwatch.services.watermark")

DEFAULT_LOOKBACK = timedelta(days=1)


def utc_now() -> datetime:
    return datetime.now(UTC)


class WatermarkStore:
    """Loads and saves the watermark at a fixed path."""

    def __init__(self, path: Path, clock: Callable[[], datetime] = utc_now) -> None:
        self._path = Path(path)
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> datetime:
        """Return the stored watermark, or now minus one day if none is stored.

        Raises:
            StoreReadError: If the file exists but is unreadable or malformed.
        """
        if not self._path.is_file():
            fallback = self._clock() - DEFAULT_LOOKBACK
            LOG.info("No watermark at %s, using %s", self._path, fallback.isoformat())
            return fallback
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StoreReadError(f"Cannot read watermark {self._path}: {e}") from e
        try:
            value = parse_timestamp(raw)
        except TimestampParseError as e:
            raise StoreReadError(f"Malformed watermark in {self._path}: {e}") from e
        LOG.debug("Loaded watermark %s from %s", value.isoformat(), self._path)
        return value

    def save(self, value: datetime) -> None:
        """Replace the stored watermark with value (ISO-8601 with offset).

        Raises:
            StoreWriteError: If the location is not writable.
        """
        text = ensure_aware(value).isoformat()
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise StoreWriteError(f"Cannot write watermark {self._path}: {e}") from e
        LOG.debug("Saved watermark %s to %s", text, self._path)
