"""Unit tests for batch CDI generation."""

from __future__ import annotations

from pathlib import Path

from core.errors import DataSetNotFoundError
from report.generator import CdiGenerator
from tests.fake_sources import FakeSource


class _FakeLogger:
    def __init__(self) -> None:
        self.warnings: list[tuple[str, dict[str, object]]] = []

    def info(self, event: str, **fields: object) -> None:
        return None

    def warning(self, event: str, **fields: object) -> None:
        self.warnings.append((event, fields))


class _SelectiveSource(FakeSource):
    def fetch_data(self, dataset_id: str) -> str | None:
        if dataset_id == "ds-missing":
            raise DataSetNotFoundError(dataset_id)
        return super().fetch_data(dataset_id)


def test_run_writes_report_for_each_dataset(tmp_path: Path, cdi_config) -> None:
    """Successful imports should produce a populated report."""
    generator = CdiGenerator(FakeSource(), cdi_config)

    results = generator.run(["ds-1"], report_template="Title: %%title%%\n")

    assert results[0].success
    assert results[0].report_path == tmp_path / "nemo" / "1234_000007_CTD_mediatlas.txt"


def test_run_continues_after_failed_dataset(tmp_path: Path, cdi_config) -> None:
    """One failing dataset should not stop the batch."""
    generator = CdiGenerator(_SelectiveSource(), cdi_config)

    results = generator.run(["ds-missing", "ds-2"], report_template="%%title%%")

    assert [result.success for result in results] == [False, True]


def test_run_fails_dataset_on_unknown_tag(tmp_path: Path, cdi_config) -> None:
    """Template errors should fail only that dataset's generation."""
    generator = CdiGenerator(FakeSource(), cdi_config)

    results = generator.run(["ds-1"], report_template="%%nope%%")

    assert results[0].success is False and "nope" in results[0].message


def test_run_without_templates_only_imports(tmp_path: Path, cdi_config) -> None:
    """Without templates the batch should only fill the cache."""
    generator = CdiGenerator(FakeSource(), cdi_config)

    results = generator.run(["ds-1"])

    assert results[0].success and results[0].report_path is None
    assert (tmp_path / "tmp" / "ds-1_data").is_file()


def test_run_skips_summary_sharing_report_name(tmp_path: Path, cdi_config, monkeypatch) -> None:
    """A summary named like the report should not overwrite it."""
    fake_logger = _FakeLogger()
    monkeypatch.setattr("report.generator._LOGGER", fake_logger)
    generator = CdiGenerator(FakeSource(), cdi_config)

    results = generator.run(["ds-1"], report_template="report", summary_template="summary")

    assert results[0].summary_path is None
    assert results[0].report_path is not None
    assert results[0].report_path.read_text(encoding="utf-8") == "report"
    assert [event for event, _ in fake_logger.warnings] == ["nemo_summary_name_collision"]


def test_run_writes_summary_without_report(tmp_path: Path, cdi_config) -> None:
    """Summaries are written when no report claims the file name."""
    generator = CdiGenerator(FakeSource(), cdi_config)

    results = generator.run(["ds-1"], summary_template="summary for %%dataset_id%%")

    assert results[0].summary_path is not None
    assert results[0].summary_path.read_text(encoding="utf-8") == "summary for ds-1"


class _BrokenMetadataSource(FakeSource):
    def fetch_metadata(self, dataset_id: str) -> str | None:
        if dataset_id == "ds-bad":
            return "internal_id=1234\nstation=abc\n"
        return super().fetch_metadata(dataset_id)


def test_run_continues_after_unexpected_source_error(tmp_path: Path, cdi_config) -> None:
    """A source raising a non-domain error should not stop the batch."""
    generator = CdiGenerator(_BrokenMetadataSource(), cdi_config)

    results = generator.run(["ds-bad", "ds-2"], report_template="%%title%%")

    assert [result.success for result in results] == [False, True]
