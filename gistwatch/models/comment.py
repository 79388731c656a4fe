"""Comment on a gist."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Comment(BaseModel):
    """Comment on a gist. Immutable once fetched."""

    model_config = ConfigDict(frozen=True)

    author: str
    body: str = ""
    updated_at: datetime
