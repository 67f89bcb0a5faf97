"""Tests for plans, password hashing and the User record."""

from __future__ import annotations

import pytest

from src.core.exceptions import QuotaExceededError, UnknownPlanError
from src.saas.account import (
    PLAN_LIMITS,
    Plan,
    User,
    generate_password,
    hash_password,
    parse_plan,
    verify_password,
)


class TestPlan:
    def test_parse_known_plans(self) -> None:
        assert parse_plan("free") is Plan.FREE
        assert parse_plan("starter") is Plan.STARTER
        assert parse_plan("professional") is Plan.PROFESSIONAL
        assert parse_plan("enterprise") is Plan.ENTERPRISE

    def test_unknown_plan_fails_closed(self) -> None:
        with pytest.raises(UnknownPlanError) as exc_info:
            parse_plan("platinum")
        assert "PLATINUM" in exc_info.value.message
        assert exc_info.value.status_code == 403

    def test_unknown_plan_is_a_quota_denial(self) -> None:
        assert issubclass(UnknownPlanError, QuotaExceededError)

    def test_none_plan_fails_closed(self) -> None:
        with pytest.raises(UnknownPlanError):
            parse_plan(None)

    def test_project_limits(self) -> None:
        assert PLAN_LIMITS[Plan.FREE]["max_projects"] == 1
        assert PLAN_LIMITS[Plan.STARTER]["max_projects"] == 10
        assert PLAN_LIMITS[Plan.PROFESSIONAL]["max_projects"] == 30
        assert PLAN_LIMITS[Plan.ENTERPRISE]["max_projects"] == 999_999


class TestUser:
    def test_public_dict_hides_password(self) -> None:
        user = User(id=1, name="Ana", email="ana@example.com", password_hash="$2b$secret")
        public = user.public_dict()
        assert public == {"id": 1, "name": "Ana", "email": "ana@example.com", "plan": "free"}
        assert "$2b$secret" not in repr(user)

    def test_tier(self) -> None:
        user = User(id=1, name="Ana", email="ana@example.com", plan="starter")
        assert user.tier is Plan.STARTER


class TestPasswords:
    def test_hash_and_verify(self) -> None:
        hashed = hash_password("s3nha-forte")
        assert hashed != "s3nha-forte"
        assert verify_password("s3nha-forte", hashed) is True
        assert verify_password("errada", hashed) is False

    def test_fixed_work_factor(self) -> None:
        hashed = hash_password("abc")
        assert hashed.startswith("$2b$10$")

    def test_salted(self) -> None:
        assert hash_password("same") != hash_password("same")

    def test_long_password_truncated_to_bcrypt_limit(self) -> None:
        base = "x" * 72
        hashed = hash_password(base + "tail-one")
        assert verify_password(base + "tail-two", hashed) is True

    def test_verify_against_garbage_hash(self) -> None:
        assert verify_password("abc", "not-a-bcrypt-hash") is False

    def test_generated_password_is_random(self) -> None:
        first = generate_password()
        second = generate_password()
        assert first != second
        assert len(first) >= 20
