"""Schedule feed integrations."""

from .schedule import ScheduleFeedClient, ScheduleFetchResult

__all__ = ["ScheduleFeedClient", "ScheduleFetchResult"]
