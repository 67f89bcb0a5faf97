"""Quota enforcement for LinkIQ plans.

Checks:
- Free accounts per source IP (signup only)
- Projects per user, bounded by the owner's plan

Both checks are pure: callers count rows, the policy decides.
"""

from __future__ import annotations

from src.core.constants import FREE_ACCOUNTS_PER_IP, MSG_IP_LIMIT, MSG_PROJECT_LIMIT
from src.core.exceptions import QuotaExceededError
from src.core.logging import get_logger
from src.saas.account import PLAN_LIMITS, Plan, parse_plan

log = get_logger(__name__)


class QuotaPolicy:
    """Decides whether a new account or project may be created."""

    def __init__(self, free_accounts_per_ip: int = FREE_ACCOUNTS_PER_IP) -> None:
        self._free_accounts_per_ip = free_accounts_per_ip

    @staticmethod
    def project_limit(plan: Plan | str) -> int:
        """Maximum project count for a plan. Unknown plans raise UnknownPlanError."""
        tier = plan if isinstance(plan, Plan) else parse_plan(plan)
        return PLAN_LIMITS[tier]["max_projects"]

    def check_account_ip_limit(self, plan: Plan | str, existing_free_accounts: int) -> None:
        """Reject a free signup when the IP already holds the maximum free accounts."""
        tier = plan if isinstance(plan, Plan) else parse_plan(plan)
        if tier is not Plan.FREE:
            return

        if existing_free_accounts >= self._free_accounts_per_ip:
            log.warning(
                "quota_exceeded",
                resource="free_accounts_per_ip",
                current=existing_free_accounts,
                limit=self._free_accounts_per_ip,
            )
            raise QuotaExceededError(
                MSG_IP_LIMIT.format(limit=self._free_accounts_per_ip),
                context={"current": existing_free_accounts},
            )

    def check_project_limit(self, plan: Plan | str, current_projects: int) -> None:
        """Reject project creation once the plan's project count is reached."""
        tier = plan if isinstance(plan, Plan) else parse_plan(plan)
        limit = self.project_limit(tier)

        if current_projects >= limit:
            log.warning(
                "quota_exceeded",
                resource="projects",
                plan=tier.value,
                current=current_projects,
                limit=limit,
            )
            raise QuotaExceededError(
                MSG_PROJECT_LIMIT.format(plan=tier.value.upper()),
                context={"plan": tier.value, "current": current_projects, "limit": limit},
            )
