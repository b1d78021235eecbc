from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

import pandas as pd

from feature_sync.errors import CsvFormatError

logger = logging.getLogger(__name__)

FEATURE_ID_COLUMN = "feature_id"


@dataclass
class FeatureSheet:
    """Parsed CSV: the locale layout from the header plus the data rows."""

    default_locale: str
    other_locales: List[str]
    rows: List[Dict[str, str]]


def read_feature_csv(path: Path) -> FeatureSheet:
    """
    Read the feature CSV into trimmed string rows.

    Column 0 must be feature_id, column 1 names the default locale and any
    further columns are additional locale codes.
    """
    try:
        raw = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            on_bad_lines="error",
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError as exc:
        raise CsvFormatError(f"CSV file is empty: {path}") from exc
    except pd.errors.ParserError as exc:
        raise CsvFormatError(f"Malformed CSV {path}: {exc}") from exc

    # header=None keeps the header cells verbatim; pandas would rename
    # duplicates to "en.1" and blanks to "Unnamed: 2".
    raw = raw.fillna("")
    headers = [str(c).strip() for c in raw.iloc[0]]
    if len(headers) < 2 or headers[0] != FEATURE_ID_COLUMN:
        raise CsvFormatError(
            "CSV must have at least columns: feature_id,en,... "
            "and feature_id must be first column."
        )
    if not all(headers):
        raise CsvFormatError("CSV header has an empty column name.")
    duplicates = sorted({h for h in headers if headers.count(h) > 1})
    if duplicates:
        raise CsvFormatError(f"CSV header repeats column(s): {', '.join(duplicates)}")

    df = raw.iloc[1:].copy()
    df.columns = headers
    if not df.empty:
        df = df.apply(lambda col: col.str.strip())

    return FeatureSheet(
        default_locale=headers[1],
        other_locales=headers[2:],
        rows=df.to_dict(orient="records"),
    )
