#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
pro_feature_sync.py

Thin CLI wrapper: reads a localized feature CSV and syncs it into the Strapi
"pro-features" collection.

    python pro_feature_sync.py features.csv
    python pro_feature_sync.py features.csv --limit 10 --log-level DEBUG

CSV layout: feature_id,<default locale>,<locale>,<locale>,...
Environment: STRAPI_URL, STRAPI_API_TOKEN, STRAPI_TIMEOUT (a .env file works too).
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sync_logging import setup_logging, shutdown_logging

from feature_sync.clients.strapi import StrapiClient
from feature_sync.config import settings_from_env
from feature_sync.csv_input import read_feature_csv
from feature_sync.exporters.json_report import JsonReportExporter
from feature_sync.models import SyncReport
from feature_sync.processing import FeatureSyncProcessor

USAGE = "Usage: pro-feature-sync <path-to-csv>"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sync localized pro-feature names from a CSV into Strapi."
    )
    # Optional here so a missing path is reported through the log, not argparse.
    parser.add_argument("csv_path", nargs="?", help="CSV file: feature_id,<default locale>,...")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Optional limit on number of CSV rows to process (for testing)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console logging level",
    )
    parser.add_argument("--reports-dir", type=str, default=None, help="Where JSON reports go (default ./reports)")
    parser.add_argument("--logs-dir", type=str, default=None, help="Where run logs go (default ./logs)")
    return parser.parse_args(argv)


def process_csv(
    csv_path: Path,
    client: StrapiClient,
    exporter: JsonReportExporter,
    limit: Optional[int] = None,
) -> Optional[SyncReport]:
    """Parse the CSV, sync every row and write the report. None when the CSV has no rows."""
    sheet = read_feature_csv(csv_path)
    if not sheet.rows:
        logging.warning("CSV has no rows.")
        return None

    rows = sheet.rows if limit is None else sheet.rows[:limit]
    logging.info("Loaded %d rows from %s (processing %d)", len(sheet.rows), csv_path, len(rows))

    processor = FeatureSyncProcessor(client=client, exporter=exporter)
    return processor.process_rows(rows, sheet.default_locale, sheet.other_locales)


def main(argv: Optional[List[str]] = None) -> None:
    if argv is None:
        argv = sys.argv[1:]

    args = parse_args(argv)
    setup_logging(log_root=args.logs_dir, console_level=getattr(logging, args.log_level))

    try:
        if not args.csv_path:
            logging.error(USAGE)
            sys.exit(1)

        csv_path = Path(args.csv_path).resolve()
        if not csv_path.is_file():
            logging.error("CSV file not found: %s", csv_path)
            sys.exit(1)

        settings = settings_from_env()
        client = StrapiClient(settings)
        exporter = JsonReportExporter(Path(args.reports_dir) if args.reports_dir else None)

        try:
            process_csv(csv_path, client, exporter, limit=args.limit)
        except Exception as e:
            logging.exception("Fatal error: %s", e)
            sys.exit(1)
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
