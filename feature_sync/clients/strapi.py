from __future__ import annotations

from typing import Any, Dict, Optional, Type
import logging

import requests

from feature_sync.config import SyncSettings
from feature_sync.errors import (
    TRANSPORT,
    UNKNOWN,
    VALIDATION,
    RemoteError,
    RemoteReadError,
    RemoteWriteError,
)
from feature_sync.models import FeaturePage, ProFeature

logger = logging.getLogger(__name__)


class StrapiClient:
    """Minimal Strapi v5 REST client for the locale-aware pro-features collection."""

    def __init__(
        self,
        settings: SyncSettings,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings
        self.base_url = settings.api_base
        self.collection = settings.collection
        self.timeout = settings.timeout
        self.session = session or requests.Session()
        if not settings.api_token:
            logger.warning(
                "STRAPI_API_TOKEN is not set. Authenticated requests will fail."
            )

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.api_token:
            headers["Authorization"] = f"Bearer {self.settings.api_token}"
        return headers

    def _url(self, path: str = "") -> str:
        url = f"{self.base_url}/{self.collection}"
        if path:
            url = f"{url}/{path.lstrip('/')}"
        return url

    def _request(
        self,
        method: str,
        operation: str,
        error_cls: Type[RemoteError],
        path: str = "",
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send one request and return the parsed JSON body, or raise error_cls."""
        try:
            resp = self.session.request(
                method,
                self._url(path),
                headers=self._headers(),
                params=params,
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise error_cls(TRANSPORT, str(exc) or exc.__class__.__name__, operation=operation) from exc

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not 200 <= resp.status_code < 300:
            if isinstance(body, dict) and isinstance(body.get("error"), dict):
                err = body["error"]
                raise error_cls(
                    VALIDATION,
                    str(err.get("message") or ""),
                    operation=operation,
                    status=resp.status_code,
                    payload=err,
                    error_name=err.get("name"),
                )
            raise error_cls(
                UNKNOWN,
                f"{operation} failed: HTTP {resp.status_code}",
                operation=operation,
                status=resp.status_code,
                payload=body if body is not None else resp.text,
            )

        if not isinstance(body, dict):
            raise error_cls(
                UNKNOWN,
                f"{operation} returned a non-JSON body",
                operation=operation,
                status=resp.status_code,
                payload=resp.text,
            )
        return body

    def find_by_feature_id(self, feature_id: str) -> Optional[ProFeature]:
        """
        Look up any locale variant by feature_id. Returns None when nothing matches.
        """
        params = {
            "filters[feature_id][$eq]": feature_id,
            "pagination[pageSize]": 1,
        }
        logger.info("GET /%s?feature_id=%s", self.collection, feature_id)
        body = self._request("GET", "find", RemoteReadError, params=params)
        page = FeaturePage.from_api(body)
        return page.data[0] if page.data else None

    def create_base(self, feature_id: str, name: str, locale: str) -> ProFeature:
        """Create a new document in the given (default) locale."""
        logger.info(
            "POST /%s (base) feature_id=%s, locale=%s",
            self.collection,
            feature_id,
            locale,
        )
        body = self._request(
            "POST",
            "create-base",
            RemoteWriteError,
            payload={"data": {"feature_id": feature_id, "name": name, "locale": locale}},
        )
        return self._record(body, "create-base")

    def upsert_locale(self, document_id: str, locale: str, name: str) -> ProFeature:
        """
        Create or overwrite the `locale` variant of an existing document.
        """
        logger.info(
            "PUT /%s/%s?locale=%s (create/update locale version)",
            self.collection,
            document_id,
            locale,
        )
        body = self._request(
            "PUT",
            "upsert-locale",
            RemoteWriteError,
            path=document_id,
            params={"locale": locale},
            payload={"data": {"name": name}},
        )
        return self._record(body, "upsert-locale")

    @staticmethod
    def _record(body: Dict[str, Any], operation: str) -> ProFeature:
        data = body.get("data")
        if not isinstance(data, dict):
            raise RemoteWriteError(
                UNKNOWN,
                f"{operation} response has no data object",
                operation=operation,
                payload=body,
            )
        return ProFeature.from_api(data)
