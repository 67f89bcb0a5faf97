"""Pydantic V2 request/response schemas for the LinkIQ API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ── Auth ──────────────────────────────────────────────────────────

class SignupRequest(BaseModel):
    """Request body for account creation. Presence is checked by the handler."""

    email: str | None = None
    name: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    plan: str


class AuthResponse(BaseModel):
    """Signup/login result: a session token plus the public user record."""

    message: str
    token: str
    user: UserOut


# ── Profile ───────────────────────────────────────────────────────

class UserStats(BaseModel):
    projects: int = 0
    backlinks: int = 0
    checks: int = 0
    alerts: int = 0


class ProfileOut(BaseModel):
    id: int
    name: str
    email: str
    plan: str
    company: str | None = None
    created_at: datetime | None = None
    stats: UserStats = Field(default_factory=UserStats)


class ProfileUpdate(BaseModel):
    name: str | None = None
    company: str | None = None


# ── API keys ──────────────────────────────────────────────────────

class ApiKeySave(BaseModel):
    """Request body for storing a third-party credential."""

    model_config = ConfigDict(populate_by_name=True)

    key_type: str | None = Field(default=None, alias="keyType")
    key_value: str | None = Field(default=None, alias="keyValue")


class ApiKeyStatus(BaseModel):
    openai: bool = False
    sendgrid: bool = False
    ahrefs: bool = False


# ── Projects ──────────────────────────────────────────────────────

class ProjectCreate(BaseModel):
    """Request body for creating a project with its monitored URLs."""

    name: str | None = None
    domain: str | None = None
    urls: list[str] | None = None


class ProjectOut(BaseModel):
    id: int
    user_id: int
    name: str
    domain: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    urls: list[str] = Field(default_factory=list)


class ProjectCreated(BaseModel):
    message: str
    project: ProjectOut


# ── Generic ───────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str = "OK"
    message: str
    timestamp: datetime


class MessageResponse(BaseModel):
    message: str
