"""User accounts — plans, password hashing and the User record.

Each user has:
- A unique email and a bcrypt password hash (never returned)
- A subscription plan governing project quotas
- The IP address the account was created from
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

import bcrypt

from src.core.constants import (
    BCRYPT_MAX_PASSWORD_BYTES,
    BCRYPT_ROUNDS,
    GENERATED_PASSWORD_BYTES,
    MSG_UNKNOWN_PLAN,
    UNLIMITED_PROJECTS,
)
from src.core.exceptions import UnknownPlanError


class Plan(str, Enum):
    FREE = "free"
    STARTER = "starter"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"


PLAN_LIMITS: dict[Plan, dict[str, int]] = {
    Plan.FREE: {"max_projects": 1},
    Plan.STARTER: {"max_projects": 10},
    Plan.PROFESSIONAL: {"max_projects": 30},
    Plan.ENTERPRISE: {"max_projects": UNLIMITED_PROJECTS},
}


def parse_plan(value: str | None) -> Plan:
    """Decode a stored plan string. Unknown values raise instead of defaulting."""
    try:
        return Plan(value)
    except ValueError:
        raise UnknownPlanError(
            MSG_UNKNOWN_PLAN.format(plan=str(value).upper()),
            context={"plan": value},
        ) from None


@dataclass
class User:
    """A LinkIQ account as stored in the ``users`` table."""

    id: int
    name: str
    email: str
    plan: str = Plan.FREE.value
    company: str | None = None
    created_ip: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None
    password_hash: str = field(default="", repr=False)

    @property
    def tier(self) -> Plan:
        return parse_plan(self.plan)

    def public_dict(self) -> dict[str, object]:
        """Fields safe to return to the account owner."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "plan": self.plan,
        }


# ── Passwords ──────────────────────────────────────────────────────


def _password_bytes(raw: str) -> bytes:
    return raw.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(raw: str) -> str:
    """Salted bcrypt hash with the fixed work factor."""
    hashed = bcrypt.hashpw(_password_bytes(raw), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(raw: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(raw), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def generate_password() -> str:
    """Random password for accounts created without one. Never shown to anyone."""
    return secrets.token_urlsafe(GENERATED_PASSWORD_BYTES)
