"""Select gists with comments at or after the watermark."""

from datetime import datetime
from typing import Iterable, List

from gistwatch.models import Comment, Gist


def qualifying_comments(gist: Gist, watermark: datetime) -> List[Comment]:
    """Comments updated at or after watermark (inclusive), in original order."""
    return [c for c in gist.comments if c.updated_at >= watermark]


def select(gists: Iterable[Gist], watermark: datetime) -> List[Gist]:
    """Gists with at least one qualifying comment, in input order."""
    return [g for g in gists if qualifying_comments(g, watermark)]
