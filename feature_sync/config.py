from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_STRAPI_URL = "http://localhost:1337"
DEFAULT_TIMEOUT = 30.0
COLLECTION = "pro-features"


@dataclass
class SyncSettings:
    """Connection settings for the Strapi instance."""

    strapi_url: str = DEFAULT_STRAPI_URL
    api_token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    collection: str = COLLECTION

    @property
    def api_base(self) -> str:
        return f"{self.strapi_url.rstrip('/')}/api"


def _timeout_from_env(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if value <= 0:
        logger.warning("Ignoring invalid STRAPI_TIMEOUT=%r; using %s", raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    return value


def settings_from_env(load_env_file: bool = True) -> SyncSettings:
    """
    Build settings from STRAPI_URL / STRAPI_API_TOKEN / STRAPI_TIMEOUT.

    A .env file in the working directory is loaded first but never overrides
    variables already present in the environment.
    """
    if load_env_file:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    token = (os.getenv("STRAPI_API_TOKEN") or "").strip() or None
    return SyncSettings(
        strapi_url=(os.getenv("STRAPI_URL") or DEFAULT_STRAPI_URL).strip(),
        api_token=token,
        timeout=_timeout_from_env(os.getenv("STRAPI_TIMEOUT")),
    )
