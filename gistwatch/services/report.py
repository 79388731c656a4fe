"""Plain-text digest of updated gists."""

from datetime import datetime
from typing import Iterable

from gistwatch.models import Gist
from gistwatch.services.change_filter import qualifying_comments

SUBJECT = "New comments on gists"


def render(gists: Iterable[Gist], watermark: datetime) -> str:
    """Render each gist (description, URL) followed by its qualifying comments.

    Output per gist::

        <description>
        <html_url>
            <author> said: <body>

    Empty descriptions and bodies are written as empty text, not skipped.
    """
    lines = []
    for gist in gists:
        lines.append(gist.description)
        lines.append(gist.html_url)
        for comment in qualifying_comments(gist, watermark):
            lines.append(f"    {comment.author} said: {comment.body}")
        lines.append("")
    return "\n".join(lines)
