from __future__ import annotations

from pathlib import Path
from typing import Protocol

from feature_sync.models import SyncReport


class ReportExporter(Protocol):
    """Common interface for report targets."""

    def finalize(self, report: SyncReport) -> Path:
        ...
