"""Tests for API Pydantic schemas."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.api.models.schemas import (
    ApiKeySave,
    ApiKeyStatus,
    AuthResponse,
    HealthResponse,
    ProfileOut,
    ProjectCreate,
    ProjectOut,
    SignupRequest,
    UserOut,
)


class TestSignupRequest:
    def test_all_fields_optional(self) -> None:
        body = SignupRequest()
        assert body.email is None
        assert body.name is None
        assert body.password is None

    def test_full(self) -> None:
        body = SignupRequest(email="a@b.com", name="Ana", password="x")
        assert body.email == "a@b.com"


class TestAuthResponse:
    def test_user_has_no_password_field(self) -> None:
        resp = AuthResponse(
            message="ok",
            token="t",
            user=UserOut(id=1, name="Ana", email="a@b.com", plan="free"),
        )
        assert "password" not in resp.model_dump()["user"]


class TestApiKeySave:
    def test_camel_case_aliases(self) -> None:
        body = ApiKeySave.model_validate({"keyType": "openai", "keyValue": "sk-1"})
        assert body.key_type == "openai"
        assert body.key_value == "sk-1"

    def test_snake_case_names_accepted(self) -> None:
        body = ApiKeySave(key_type="ahrefs", key_value="k")
        assert body.key_type == "ahrefs"

    def test_missing_fields_are_none(self) -> None:
        body = ApiKeySave.model_validate({})
        assert body.key_type is None
        assert body.key_value is None


class TestApiKeyStatus:
    def test_defaults_false(self) -> None:
        assert ApiKeyStatus().model_dump() == {
            "openai": False,
            "sendgrid": False,
            "ahrefs": False,
        }


class TestProjectSchemas:
    def test_urls_optional(self) -> None:
        assert ProjectCreate(name="Site", domain="site.com").urls is None

    def test_urls_must_be_strings(self) -> None:
        with pytest.raises(ValidationError):
            ProjectCreate(name="Site", domain="site.com", urls=[{"url": "x"}])

    def test_project_out_default_urls(self) -> None:
        project = ProjectOut(id=1, user_id=2, name="Site", domain="site.com")
        assert project.urls == []


class TestProfileOut:
    def test_default_stats(self) -> None:
        profile = ProfileOut(id=1, name="Ana", email="a@b.com", plan="free")
        assert profile.stats.model_dump() == {
            "projects": 0,
            "backlinks": 0,
            "checks": 0,
            "alerts": 0,
        }
        assert profile.company is None


class TestHealthResponse:
    def test_serialization(self) -> None:
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        data = HealthResponse(message="up", timestamp=now).model_dump()
        assert data["status"] == "OK"
        assert data["timestamp"] == now
