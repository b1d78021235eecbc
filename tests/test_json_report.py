from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from feature_sync.exporters.json_report import JsonReportExporter
from feature_sync.models import SyncFailure, SyncReport, SyncSuccess


def _report() -> SyncReport:
    report = SyncReport(default_locale="en", other_locales=["vi"])
    report.processed_rows = 1
    report.successes.append(
        SyncSuccess(feature_id="F1", locale="vi", action="upsert-locale", document_id="doc-1", name="Xin chào")
    )
    report.failures.append(
        SyncFailure(
            feature_id="",
            locale="en",
            action="create-base",
            error="Missing feature_id",
            row={"feature_id": "", "en": "Hello", "vi": ""},
        )
    )
    return report


def test_writes_pretty_camel_case_json(tmp_path: Path) -> None:
    exporter = JsonReportExporter(tmp_path / "reports")

    path = exporter.finalize(_report())

    assert path.parent == tmp_path / "reports"
    assert path.name.startswith("pro-feature-sync-report-")
    assert path.suffix == ".json"
    text = path.read_text(encoding="utf-8")
    assert "Xin chào" in text
    assert text.startswith('{\n  "defaultLocale"')
    assert json.loads(text) == {
        "defaultLocale": "en",
        "otherLocales": ["vi"],
        "processedRows": 1,
        "successes": [
            {"featureId": "F1", "locale": "vi", "action": "upsert-locale", "documentId": "doc-1", "name": "Xin chào"}
        ],
        "failures": [
            {
                "featureId": "",
                "locale": "en",
                "action": "create-base",
                "error": "Missing feature_id",
                "row": {"feature_id": "", "en": "Hello", "vi": ""},
            }
        ],
    }


def test_report_file_name_has_no_colons(tmp_path: Path) -> None:
    exporter = JsonReportExporter(tmp_path)
    when = datetime(2025, 3, 4, 5, 6, 7, 89000, tzinfo=timezone.utc)

    assert exporter.report_path(when).name == "pro-feature-sync-report-2025-03-04T05-06-07-089Z.json"


def test_report_is_written_once(tmp_path: Path) -> None:
    exporter = JsonReportExporter(tmp_path)
    exporter.finalize(_report())

    with pytest.raises(RuntimeError):
        exporter.finalize(_report())

    assert len(list(tmp_path.glob("*.json"))) == 1


def test_summary_line_counts() -> None:
    assert _report().summary_line() == "Summary: processed=1, success=1, failures=1"
