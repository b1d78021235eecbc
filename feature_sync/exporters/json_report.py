from __future__ import annotations

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from sync_logging import get_logger, run_stamp

from feature_sync.exporters.base import ReportExporter
from feature_sync.models import SyncReport

logger = get_logger(__name__)


class JsonReportExporter(ReportExporter):
    """
    Writes the finished SyncReport as pretty-printed JSON, once per run:
        <reports_dir>/pro-feature-sync-report-<UTC timestamp>.json
    """

    def __init__(self, reports_dir: Optional[Path] = None) -> None:
        self.reports_dir = Path(reports_dir) if reports_dir else Path(os.getcwd()) / "reports"
        self.written_path: Optional[Path] = None

    def report_path(self, now: Optional[datetime] = None) -> Path:
        return self.reports_dir / f"pro-feature-sync-report-{run_stamp(now)}.json"

    def finalize(self, report: SyncReport) -> Path:
        if self.written_path is not None:
            raise RuntimeError(f"Report already written to {self.written_path}")

        self.reports_dir.mkdir(parents=True, exist_ok=True)
        path = self.report_path()
        with path.open("w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
        self.written_path = path

        logger.info("Sync complete. Report written to: %s", path)
        logger.info(report.summary_line())
        return path
