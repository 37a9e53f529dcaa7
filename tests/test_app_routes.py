from __future__ import annotations

import pytest

pytest.importorskip("fastapi")

from fastapi.exceptions import RequestValidationError

from pydantic import ValidationError

from skillswap.config import Settings
from skillswap.main import _format_validation_errors, app


def _route_index(path: str, method: str) -> int:
    for index, route in enumerate(app.routes):
        if getattr(route, "path", None) == path and method in getattr(route, "methods", set()):
            return index
    raise AssertionError(f"{method} {path} is not registered")


def test_api_routes_are_mounted_under_api_prefix():
    expected = [
        ("/api/auth/register", "POST"),
        ("/api/auth/login", "POST"),
        ("/api/auth/user", "GET"),
        ("/api/users/search", "GET"),
        ("/api/users/profile", "PUT"),
        ("/api/users/{user_id}", "GET"),
        ("/api/users/{user_id}/availability", "GET"),
        ("/api/skills", "POST"),
        ("/api/skills/mine", "GET"),
        ("/api/availability", "PUT"),
        ("/api/swap-requests", "POST"),
        ("/api/swap-requests/{request_id}/status", "PATCH"),
        ("/api/swap-requests/{request_id}/status", "PUT"),
        ("/api/reviews", "POST"),
        ("/api/reviews/{user_id}/summary", "GET"),
        ("/api/reports", "POST"),
        ("/api/announcements", "GET"),
        ("/api/admin/stats", "GET"),
        ("/api/admin/users/{user_id}/moderate", "POST"),
        ("/api/admin/activity-report", "GET"),
        ("/health", "GET"),
    ]
    for path, method in expected:
        _route_index(path, method)


def test_user_search_is_matched_before_profile_lookup():
    assert _route_index("/api/users/search", "GET") < _route_index("/api/users/{user_id}", "GET")


def test_validation_errors_are_flattened_to_field_messages():
    exc = RequestValidationError([
        {"loc": ("body", "rating"), "msg": "Input should be less than or equal to 5", "type": "less_than_equal"},
        {"loc": ("query", "limit"), "msg": "Input should be a valid integer", "type": "int_parsing"},
    ])
    assert _format_validation_errors(exc) == [
        {"field": "rating", "message": "Input should be less than or equal to 5"},
        {"field": "limit", "message": "Input should be a valid integer"},
    ]


def test_secret_key_has_no_default(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)

    monkeypatch.setenv("SECRET_KEY", "from-env")
    assert Settings(_env_file=None).SECRET_KEY == "from-env"


def test_app_is_not_built_in_debug_mode():
    assert app.debug is False
