"""SaaS account layer — plans, passwords, session tokens, quotas and secret encryption."""

from src.saas.account import PLAN_LIMITS, Plan, User, hash_password, parse_plan, verify_password
from src.saas.quota import QuotaPolicy
from src.saas.tokens import JWTManager, TokenClaims
from src.saas.vault import KNOWN_KEY_TYPES, KeyType, SecretCipher

__all__ = [
    "PLAN_LIMITS",
    "Plan",
    "User",
    "hash_password",
    "parse_plan",
    "verify_password",
    "QuotaPolicy",
    "JWTManager",
    "TokenClaims",
    "KNOWN_KEY_TYPES",
    "KeyType",
    "SecretCipher",
]
