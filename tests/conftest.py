from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

import pytest

from feature_sync.errors import TRANSPORT, VALIDATION, RemoteReadError, RemoteWriteError
from feature_sync.models import ProFeature


class InMemoryStrapi:
    """Fake pro-features collection keyed by (documentId, locale)."""

    def __init__(self) -> None:
        self.records: Dict[Tuple[str, str], ProFeature] = {}
        self.calls: List[Tuple[str, ...]] = []
        self.reject_create: Set[str] = set()
        self.reject_locales: Set[str] = set()
        self.fail_find = False
        self._next = 1

    def find_by_feature_id(self, feature_id: str) -> Optional[ProFeature]:
        self.calls.append(("find", feature_id))
        if self.fail_find:
            raise RemoteReadError(TRANSPORT, "Connection refused", operation="find")
        for record in self.records.values():
            if record.feature_id == feature_id:
                return record
        return None

    def create_base(self, feature_id: str, name: str, locale: str) -> ProFeature:
        self.calls.append(("create", feature_id, locale))
        if feature_id in self.reject_create:
            raise RemoteWriteError(
                VALIDATION,
                "name must be at most 10 characters",
                operation="create-base",
                status=400,
                payload={"name": "ValidationError"},
                error_name="ValidationError",
            )
        document_id = f"doc-{self._next}"
        self._next += 1
        record = ProFeature(id=self._next, document_id=document_id, feature_id=feature_id, name=name, locale=locale)
        self.records[(document_id, locale)] = record
        return record

    def upsert_locale(self, document_id: str, locale: str, name: str) -> ProFeature:
        self.calls.append(("upsert", document_id, locale))
        if locale in self.reject_locales:
            raise RemoteWriteError(
                VALIDATION,
                f"Locale {locale} not found",
                operation="upsert-locale",
                status=400,
                error_name="ApplicationError",
            )
        base = next(r for (doc, _), r in self.records.items() if doc == document_id)
        record = ProFeature(id=self._next, document_id=document_id, feature_id=base.feature_id, name=name, locale=locale)
        self.records[(document_id, locale)] = record
        return record


@pytest.fixture
def remote() -> InMemoryStrapi:
    return InMemoryStrapi()
