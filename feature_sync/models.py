from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class SyncAction:
    """Report actions for one (feature_id, locale) step."""

    CREATE_BASE = "create-base"
    UPDATE_BASE = "update-base"
    UPSERT_LOCALE = "upsert-locale"


@dataclass
class ProFeature:
    """One locale variant of a pro-feature document as returned by Strapi."""

    id: Optional[int]
    document_id: str
    feature_id: str
    name: str
    locale: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    published_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ProFeature":
        return cls(
            id=data.get("id"),
            document_id=str(data.get("documentId") or ""),
            feature_id=str(data.get("feature_id") or ""),
            name=str(data.get("name") or ""),
            locale=str(data.get("locale") or ""),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            published_at=data.get("publishedAt"),
        )


@dataclass
class PaginationMeta:
    page: int = 1
    page_size: int = 0
    page_count: int = 0
    total: int = 0

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> "PaginationMeta":
        data = data or {}
        return cls(
            page=int(data.get("page") or 1),
            page_size=int(data.get("pageSize") or 0),
            page_count=int(data.get("pageCount") or 0),
            total=int(data.get("total") or 0),
        )


@dataclass
class FeaturePage:
    """A list response from GET /pro-features."""

    data: List[ProFeature]
    pagination: PaginationMeta

    @classmethod
    def from_api(cls, body: Dict[str, Any]) -> "FeaturePage":
        items = body.get("data") or []
        meta = body.get("meta") or {}
        return cls(
            data=[ProFeature.from_api(item) for item in items],
            pagination=PaginationMeta.from_api(meta.get("pagination")),
        )


@dataclass
class SyncSuccess:
    feature_id: str
    locale: str
    action: str
    document_id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "featureId": self.feature_id,
            "locale": self.locale,
            "action": self.action,
            "documentId": self.document_id,
            "name": self.name,
        }


@dataclass
class SyncFailure:
    feature_id: str
    locale: str
    action: str
    error: str
    row: Dict[str, str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "featureId": self.feature_id,
            "locale": self.locale,
            "action": self.action,
            "error": self.error,
            "row": dict(self.row),
        }


@dataclass
class SyncReport:
    """Aggregated results from one sync run."""

    default_locale: str
    other_locales: List[str]
    processed_rows: int = 0
    successes: List[SyncSuccess] = field(default_factory=list)
    failures: List[SyncFailure] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "defaultLocale": self.default_locale,
            "otherLocales": list(self.other_locales),
            "processedRows": self.processed_rows,
            "successes": [s.to_dict() for s in self.successes],
            "failures": [f.to_dict() for f in self.failures],
        }

    def summary_line(self) -> str:
        return (
            f"Summary: processed={self.processed_rows}, "
            f"success={len(self.successes)}, failures={len(self.failures)}"
        )
