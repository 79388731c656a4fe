"""Tests for WatermarkStore (last run time file)."""

from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest

from gistwatch.errors import StoreReadError, StoreWriteError, TimestampParseError
from gistwatch.services.watermark import WatermarkStore

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)


def test_load_missing_file_returns_now_minus_one_day(tmp_path: Path) -> None:
    """No file: watermark is one day before now."""
    store = WatermarkStore(tmp_path / "last-run", clock=lambda: NOW)
    assert store.load() == NOW - timedelta(days=1)


def test_load_reads_stored_value(tmp_path: Path) -> None:
    """load parses the ISO-8601 value in the file."""
    path = tmp_path / "last-run"
    path.write_text("2024-01-01T00:00:00+00:00", encoding="utf-8")
    assert WatermarkStore(path).load() == datetime(2024, 1, 1, tzinfo=UTC)


def test_load_malformed_raises_store_read_error(tmp_path: Path) -> None:
    """Garbage in the file raises StoreReadError caused by TimestampParseError."""
    path = tmp_path / "last-run"
    path.write_text("not a date", encoding="utf-8")
    with pytest.raises(StoreReadError) as exc_info:
        WatermarkStore(path).load()
    assert isinstance(exc_info.value.__cause__, TimestampParseError)


def test_load_empty_file_raises(tmp_path: Path) -> None:
    """An empty file is malformed, not missing."""
    path = tmp_path / "last-run"
    path.write_text("", encoding="utf-8")
    with pytest.raises(StoreReadError):
        WatermarkStore(path).load()


def test_save_writes_iso_with_offset(tmp_path: Path) -> None:
    """save writes a single ISO-8601 timestamp including the offset."""
    path = tmp_path / "last-run"
    WatermarkStore(path).save(NOW)
    assert path.read_text(encoding="utf-8") == "2024-06-01T12:00:00+00:00"


def test_save_replaces_previous_content(tmp_path: Path) -> None:
    """save overwrites; it never appends."""
    path = tmp_path / "last-run"
    store = WatermarkStore(path)
    store.save(NOW - timedelta(days=3))
    store.save(NOW)
    assert path.read_text(encoding="utf-8") == NOW.isoformat()


def test_save_creates_parent_dirs(tmp_path: Path) -> None:
    """Missing parent directories are created."""
    path = tmp_path / "state" / "gistwatch" / "last-run"
    WatermarkStore(path).save(NOW)
    assert path.is_file()


def test_save_unwritable_raises_store_write_error(tmp_path: Path) -> None:
    """A location that cannot be written raises StoreWriteError."""
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(StoreWriteError):
        WatermarkStore(blocker / "last-run").save(NOW)


@pytest.mark.parametrize(
    "value",
    [
        NOW,
        datetime(2024, 1, 1, 3, 4, 5, 678901, tzinfo=timezone(timedelta(hours=5, minutes=30))),
        datetime(1999, 12, 31, 23, 59, 59, tzinfo=timezone(timedelta(hours=-8))),
    ],
)
def test_round_trip(tmp_path: Path, value: datetime) -> None:
    """load after save yields the same instant."""
    store = WatermarkStore(tmp_path / "last-run")
    store.save(value)
    assert store.load() == value


def test_save_naive_value_is_stored_as_utc(tmp_path: Path) -> None:
    """Naive datetimes are written with a UTC offset."""
    store = WatermarkStore(tmp_path / "last-run")
    store.save(datetime(2024, 1, 1))
    assert store.load() == datetime(2024, 1, 1, tzinfo=UTC)
