"""Tests for bearer-token extraction and verification."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from src.api.middleware import extract_bearer_token, get_current_user
from src.core.exceptions import InvalidTokenError, MissingTokenError
from src.saas.tokens import JWTManager


def _request(authorization: str, jwt: JWTManager) -> MagicMock:
    request = MagicMock()
    request.headers.get.return_value = authorization
    request.app.state.jwt = jwt
    return request


class TestExtractBearerToken:
    def test_bearer(self) -> None:
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_case_insensitive(self) -> None:
        assert extract_bearer_token("bearer abc") == "abc"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Basic dXNlcjpwYXNz"])
    def test_no_token(self, header: str | None) -> None:
        assert extract_bearer_token(header) is None


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_valid_token(self) -> None:
        jwt = JWTManager(secret="test-secret-key")
        token = jwt.create_token(7, "ana@example.com")

        claims = await get_current_user(_request(f"Bearer {token}", jwt))
        assert claims.user_id == 7
        assert claims.email == "ana@example.com"

    @pytest.mark.asyncio
    async def test_no_token_raises_401(self) -> None:
        with pytest.raises(MissingTokenError) as exc_info:
            await get_current_user(_request("", JWTManager(secret="s")))
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token_raises_403(self) -> None:
        with pytest.raises(InvalidTokenError) as exc_info:
            await get_current_user(_request("Bearer bad-token", JWTManager(secret="s")))
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_token_from_other_secret_rejected(self) -> None:
        token = JWTManager(secret="one").create_token(1, "a@b.com")
        with pytest.raises(InvalidTokenError):
            await get_current_user(_request(f"Bearer {token}", JWTManager(secret="two")))
