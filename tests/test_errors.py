from __future__ import annotations

import pytest

from feature_sync.errors import (
    TRANSPORT,
    UNKNOWN,
    VALIDATION,
    RemoteError,
    RemoteWriteError,
    format_error,
)


def test_validation_error_uses_name_and_message() -> None:
    err = RemoteWriteError(VALIDATION, "Invalid locale", payload={"name": "ApplicationError"}, error_name="ApplicationError")

    assert format_error(err) == "ApplicationError: Invalid locale"


def test_validation_error_without_name_or_message_dumps_error_object() -> None:
    err = RemoteWriteError(VALIDATION, "", payload={"status": 403})

    assert format_error(err) == 'Error: {"status": 403}'


def test_unknown_error_dumps_payload() -> None:
    err = RemoteWriteError(UNKNOWN, "create-base failed: HTTP 500", payload={"oops": ["a", "b"]})

    assert format_error(err) == '{"oops": ["a", "b"]}'


def test_unknown_error_without_payload_falls_back_to_message() -> None:
    err = RemoteWriteError(UNKNOWN, "Remote response has no documentId")

    assert format_error(err) == "Remote response has no documentId"


def test_transport_error_uses_message() -> None:
    err = RemoteError(TRANSPORT, "Read timed out.")

    assert format_error(err) == "Read timed out."
    assert str(err) == "Read timed out."


def test_plain_exceptions() -> None:
    assert format_error(ValueError("boom")) == "boom"
    assert format_error(RuntimeError()) == "RuntimeError"


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(ValueError):
        RemoteError("teapot", "nope")
