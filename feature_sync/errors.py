"""
Remote error taxonomy and the formatter used for report entries.

Every failure coming out of StrapiClient is a RemoteError tagged with one of
three kinds, and format_error() has one rule per kind.
"""

from __future__ import annotations

import json
from typing import Any, Optional

TRANSPORT = "transport"
VALIDATION = "validation"
UNKNOWN = "unknown"

KINDS = (TRANSPORT, VALIDATION, UNKNOWN)


class CsvFormatError(ValueError):
    """The CSV header does not have the feature_id,<default locale>,... shape."""


class RemoteError(Exception):
    """A request to the remote collection failed."""

    def __init__(
        self,
        kind: str,
        message: str,
        *,
        operation: str = "",
        status: Optional[int] = None,
        payload: Any = None,
        error_name: Optional[str] = None,
    ) -> None:
        if kind not in KINDS:
            raise ValueError(f"Unknown remote error kind: {kind!r}")
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.operation = operation
        self.status = status
        self.payload = payload
        self.error_name = error_name

    def __str__(self) -> str:
        return format_error(self)


class RemoteReadError(RemoteError):
    """Raised by lookups (GET)."""


class RemoteWriteError(RemoteError):
    """Raised by create / locale upsert (POST, PUT)."""


def _dump(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def format_error(exc: BaseException) -> str:
    """Render any exception as the one-line string stored in the report."""
    if isinstance(exc, RemoteError):
        if exc.kind == VALIDATION:
            if exc.message:
                return f"{exc.error_name or 'Error'}: {exc.message}"
            return f"{exc.error_name or 'Error'}: {_dump(exc.payload)}"
        if exc.kind == UNKNOWN:
            return _dump(exc.payload) if exc.payload is not None else exc.message
        return exc.message
    text = str(exc)
    return text or exc.__class__.__name__
