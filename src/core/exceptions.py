"""Custom exception hierarchy for LinkIQ.

Each error carries the HTTP status it maps to at the API boundary and a
user-facing message in Brazilian Portuguese.
"""

from __future__ import annotations

from typing import Any


class LinkIQBaseError(Exception):
    """Base exception for all LinkIQ errors."""

    status_code: int = 500

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}


# ── Input ────────────────────────────────────────────────────────

class ValidationError(LinkIQBaseError):
    """Missing or malformed input."""

    status_code = 400


class DuplicateEmailError(LinkIQBaseError):
    """Signup with an email that is already registered."""

    status_code = 400


# ── Auth ─────────────────────────────────────────────────────────

class InvalidCredentialsError(LinkIQBaseError):
    """Login failed. Never says whether the email or the password was wrong."""

    status_code = 401


class MissingTokenError(LinkIQBaseError):
    """No bearer token on a protected route."""

    status_code = 401


class InvalidTokenError(LinkIQBaseError):
    """Bearer token is malformed, badly signed or expired."""

    status_code = 403


# ── Quotas ───────────────────────────────────────────────────────

class QuotaExceededError(LinkIQBaseError):
    """Plan limit reached for the requested resource."""

    status_code = 403


class UnknownPlanError(QuotaExceededError):
    """Stored plan value is not a known tier. Treated as a denial."""


# ── Persistence ──────────────────────────────────────────────────

class NotFoundError(LinkIQBaseError):
    """Requested row does not exist."""

    status_code = 404


class PersistenceError(LinkIQBaseError):
    """Database round trip failed. Details are logged, never returned."""

    status_code = 500
