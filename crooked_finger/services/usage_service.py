"""AI usage dashboard and quota reset countdown."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from crooked_finger.infrastructure.graphql import operations
from crooked_finger.infrastructure.graphql.client import GraphQLClient
from crooked_finger.infrastructure.graphql.errors import GraphQLClientError
from crooked_finger.infrastructure.graphql.responses import AIUsageDashboard, AIUsageDashboardData
from crooked_finger.utils.logger import get_logger

logger = get_logger()

# Quotas reset at midnight Pacific time.
QUOTA_TIMEZONE = ZoneInfo("America/Los_Angeles")


def time_until_reset(now: datetime | None = None) -> str:
    """Countdown to the next quota reset, formatted "HHh MMm SSs"."""
    current = (now or datetime.now(QUOTA_TIMEZONE)).astimezone(QUOTA_TIMEZONE)
    next_midnight = datetime.combine(
        current.date() + timedelta(days=1), datetime.min.time(), tzinfo=QUOTA_TIMEZONE
    )
    # Same-zone subtraction is wall-clock; go through UTC so DST days are 23h or 25h.
    remaining = int((next_midnight.astimezone(timezone.utc) - current.astimezone(timezone.utc)).total_seconds())
    hours, rest = divmod(remaining, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}h {minutes:02d}m {seconds:02d}s"


class UsageService:
    def __init__(self, client: GraphQLClient) -> None:
        self._client = client
        self.dashboard: AIUsageDashboard | None = None
        self.error_message: str | None = None

    def fetch_dashboard(self) -> AIUsageDashboard | None:
        self.error_message = None
        try:
            data = self._client.execute(operations.AI_USAGE_DASHBOARD, None, AIUsageDashboardData)
        except GraphQLClientError as e:
            self.error_message = f"Failed to load AI usage: {e}"
            logger.warning("Usage dashboard fetch failed (%s): %s", e.kind.value, e)
            return None
        self.dashboard = data.ai_usage_dashboard
        logger.debug(
            "Usage: %d requests today, %d remaining",
            self.dashboard.total_requests_today, self.dashboard.total_remaining,
        )
        return self.dashboard
