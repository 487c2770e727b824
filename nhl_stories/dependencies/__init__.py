"""FastAPI dependencies for the stories API."""

from .auth import verify_cron_secret

__all__ = ["verify_cron_secret"]
