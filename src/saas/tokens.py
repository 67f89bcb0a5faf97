"""Session tokens — HS256 JWTs carrying the user's id and email."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass

from src.core.constants import MSG_TOKEN_INVALID, TOKEN_EXPIRY_DAYS
from src.core.exceptions import InvalidTokenError
from src.core.logging import get_logger

log = get_logger(__name__)

_SECONDS_PER_DAY = 86_400


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified session token."""

    user_id: int
    email: str


class JWTManager:
    """Minimal JWT implementation (HS256) — no external dependency."""

    def __init__(self, secret: str, expiry_days: int = TOKEN_EXPIRY_DAYS) -> None:
        self._secret: str = secret
        self._expiry_days: int = expiry_days

    def create_token(self, user_id: int, email: str) -> str:
        """Create a signed JWT token valid for ``expiry_days``."""
        now = int(time.time())
        payload = {
            "userId": user_id,
            "email": email,
            "iat": now,
            "exp": now + self._expiry_days * _SECONDS_PER_DAY,
        }

        header = self._b64url_encode(json.dumps({"alg": "HS256", "typ": "JWT"}).encode())
        body = self._b64url_encode(json.dumps(payload).encode())
        signature = self._sign(f"{header}.{body}")

        return f"{header}.{body}.{signature}"

    def verify_token(self, token: str) -> TokenClaims:
        """Verify a JWT token and return its claims.

        Raises InvalidTokenError on bad structure, signature mismatch,
        missing claims or expiry.
        """
        parts = token.split(".")
        if len(parts) != 3:
            raise InvalidTokenError(MSG_TOKEN_INVALID)

        header_b64, body_b64, sig = parts
        expected_sig = self._sign(f"{header_b64}.{body_b64}")

        if not hmac.compare_digest(sig, expected_sig):
            log.warning("jwt_invalid_signature")
            raise InvalidTokenError(MSG_TOKEN_INVALID)

        try:
            payload = json.loads(self._b64url_decode(body_b64))
        except (json.JSONDecodeError, ValueError, UnicodeDecodeError):
            log.warning("jwt_decode_error")
            raise InvalidTokenError(MSG_TOKEN_INVALID) from None

        if not isinstance(payload, dict):
            raise InvalidTokenError(MSG_TOKEN_INVALID)

        exp = payload.get("exp", 0)
        if not isinstance(exp, int) or int(time.time()) > exp:
            log.debug("jwt_expired", user_id=payload.get("userId"))
            raise InvalidTokenError(MSG_TOKEN_INVALID)

        user_id = payload.get("userId")
        email = payload.get("email")
        if not isinstance(user_id, int) or not isinstance(email, str):
            log.warning("jwt_missing_claims")
            raise InvalidTokenError(MSG_TOKEN_INVALID)

        return TokenClaims(user_id=user_id, email=email)

    def _sign(self, message: str) -> str:
        sig_bytes = hmac.new(
            self._secret.encode(),
            message.encode(),
            hashlib.sha256,
        ).digest()
        return self._b64url_encode(sig_bytes)

    @staticmethod
    def _b64url_encode(data: bytes) -> str:
        return base64.urlsafe_b64encode(data).rstrip(b"=").decode()

    @staticmethod
    def _b64url_decode(s: str) -> bytes:
        padding = 4 - len(s) % 4
        if padding != 4:
            s += "=" * padding
        return base64.urlsafe_b64decode(s)
