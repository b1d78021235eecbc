from __future__ import annotations

import logging
from typing import Dict, List, Optional

from feature_sync.clients.strapi import StrapiClient
from feature_sync.csv_input import FEATURE_ID_COLUMN
from feature_sync.errors import UNKNOWN, RemoteWriteError, format_error
from feature_sync.exporters.base import ReportExporter
from feature_sync.models import SyncAction, SyncFailure, SyncReport, SyncSuccess


class FeatureSyncProcessor:
    """Drives the per-row, per-locale synchronization against Strapi."""

    def __init__(
        self,
        client: StrapiClient,
        exporter: Optional[ReportExporter] = None,
    ) -> None:
        self.client = client
        self.exporter = exporter
        self.logger = logging.getLogger(__name__)

    def process_rows(
        self,
        rows: List[Dict[str, str]],
        default_locale: str,
        other_locales: List[str],
    ) -> SyncReport:
        """
        Sync every row in file order and return the accumulated report.

        Rows and locales are handled strictly one request at a time so the
        report order matches the CSV row/column order.
        """
        self.logger.info(
            "Default locale: %s, other locales: %s",
            default_locale,
            ", ".join(other_locales) or "(none)",
        )
        report = SyncReport(default_locale=default_locale, other_locales=list(other_locales))

        for row in rows:
            self._process_row(row, report)

        if self.exporter is not None:
            self.exporter.finalize(report)
        return report

    def _process_row(self, row: Dict[str, str], report: SyncReport) -> None:
        default_locale = report.default_locale
        feature_id = (row.get(FEATURE_ID_COLUMN) or "").strip()
        if not feature_id:
            self.logger.warning("Skipping row without feature_id")
            self._fail(report, "", default_locale, SyncAction.CREATE_BASE, "Missing feature_id", row)
            return

        base_name = (row.get(default_locale) or "").strip()
        if not base_name:
            self.logger.warning(
                'Skipping feature_id=%s because default locale "%s" name is empty',
                feature_id,
                default_locale,
            )
            self._fail(
                report,
                feature_id,
                default_locale,
                SyncAction.CREATE_BASE,
                f'Missing name for default locale "{default_locale}"',
                row,
            )
            return

        self.logger.info('=== Processing feature_id="%s" ===', feature_id)

        document_id = self._sync_base(feature_id, base_name, row, report)
        if document_id is None:
            # Locale variants hang off the base documentId.
            return

        for locale in report.other_locales:
            name = (row.get(locale) or "").strip()
            if not name:
                self.logger.info('Locale "%s" empty for feature_id=%s, skipping.', locale, feature_id)
                continue
            try:
                localized = self.client.upsert_locale(document_id, locale, name)
            except Exception as exc:
                msg = format_error(exc)
                self.logger.error(
                    "Error processing locale=%s for feature_id=%s: %s", locale, feature_id, msg
                )
                self._fail(report, feature_id, locale, SyncAction.UPSERT_LOCALE, msg, row)
                continue
            report.successes.append(
                SyncSuccess(
                    feature_id=feature_id,
                    locale=locale,
                    action=SyncAction.UPSERT_LOCALE,
                    document_id=document_id,
                    name=localized.name,
                )
            )

        report.processed_rows += 1

    def _sync_base(
        self,
        feature_id: str,
        base_name: str,
        row: Dict[str, str],
        report: SyncReport,
    ) -> Optional[str]:
        """Create or update the default-locale document; returns its documentId or None."""
        locale = report.default_locale
        action = SyncAction.CREATE_BASE
        try:
            existing = self.client.find_by_feature_id(feature_id)
            if existing is None:
                self.logger.info(
                    "No existing document. Creating base document feature_id=%s, locale=%s",
                    feature_id,
                    locale,
                )
                record = self.client.create_base(feature_id, base_name, locale)
                document_id = record.document_id
                if not document_id:
                    raise RemoteWriteError(
                        UNKNOWN, "Remote response has no documentId", operation=action
                    )
            else:
                action = SyncAction.UPDATE_BASE
                document_id = existing.document_id
                if not document_id:
                    raise RemoteWriteError(
                        UNKNOWN, "Existing record has no documentId", operation=action
                    )
                self.logger.info(
                    "Found existing documentId=%s. Updating base locale=%s", document_id, locale
                )
                record = self.client.upsert_locale(document_id, locale, base_name)
        except Exception as exc:
            msg = format_error(exc)
            self.logger.error(
                "Error processing base locale for feature_id=%s: %s", feature_id, msg
            )
            self._fail(report, feature_id, locale, action, msg, row)
            return None

        report.successes.append(
            SyncSuccess(
                feature_id=feature_id,
                locale=locale,
                action=action,
                document_id=document_id,
                name=record.name,
            )
        )
        return document_id

    @staticmethod
    def _fail(
        report: SyncReport,
        feature_id: str,
        locale: str,
        action: str,
        error: str,
        row: Dict[str, str],
    ) -> None:
        report.failures.append(
            SyncFailure(feature_id=feature_id, locale=locale, action=action, error=error, row=dict(row))
        )
