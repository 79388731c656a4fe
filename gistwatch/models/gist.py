"""Gist with the comments fetched for it."""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from gistwatch.models.comment import Comment


class Gist(BaseModel):
    """Remote gist.

    Built without comments from the listing; ``with_comments`` returns a new
    gist carrying the fetched comments.
    """

    model_config = ConfigDict(frozen=True)

    url: str = ""
    description: str = ""
    html_url: str = ""
    comments_url: str = ""
    comment_count: int = 0
    comments: Tuple[Comment, ...] = Field(default_factory=tuple)

    @property
    def has_comments(self) -> bool:
        return self.comment_count > 0

    def with_comments(self, comments: list[Comment]) -> "Gist":
        return self.model_copy(update={"comments": tuple(comments)})
