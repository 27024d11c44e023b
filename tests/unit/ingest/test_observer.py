"""Unit tests for the logging import observer."""

from __future__ import annotations

from ingest.observer import LoggingImportObserver
from tests.fake_sources import FakeSource


class _FakeLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, object]]] = []

    def info(self, event: str, **fields: object) -> None:
        self.events.append((event, fields))


def test_report_progress_logs_counter_line(monkeypatch) -> None:
    """Progress lines should carry the batch counter and dataset id."""
    fake_logger = _FakeLogger()
    monkeypatch.setattr("ingest.observer._LOGGER", fake_logger)
    observer = LoggingImportObserver(FakeSource())
    observer.start_batch(3)
    observer.start_dataset("ds-1")
    observer.start_dataset("ds-2")

    observer.report_progress("Retrieving data...")

    assert fake_logger.events == [("import_progress", {"line": "2/3 ds-2: Retrieving data..."})]


def test_log_message_logs_dataset_event(monkeypatch) -> None:
    """Dataset messages should be logged with the dataset id."""
    fake_logger = _FakeLogger()
    monkeypatch.setattr("ingest.observer._LOGGER", fake_logger)
    observer = LoggingImportObserver(FakeSource())

    observer.log_message("ds-1", "Data set not found")

    assert fake_logger.events[0][1] == {"dataset_id": "ds-1", "message": "Data set not found"}


def test_observer_delegates_id_questions_to_source() -> None:
    """Id descriptors and validation should come from the source."""
    observer = LoggingImportObserver(FakeSource())

    answers = (
        observer.describe_id_kind(),
        observer.id_format_description(),
        observer.validate_id_format("ds-9"),
        observer.validate_id_format("other"),
    )

    assert answers == ("IDs", "ds-n", True, False)
