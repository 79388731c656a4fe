"""Data models for gists, comments and notification requests (Pydantic)."""

from gistwatch.models.comment import Comment
from gistwatch.models.gist import Gist
from gistwatch.models.notification import NotificationRequest
from gistwatch.models.run_result import RunResult

__all__ = ["Comment", "Gist", "NotificationRequest", "RunResult"]
