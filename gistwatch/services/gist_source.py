"""Traversal of a user's gists and their comments, one request at a time."""

import logging
import time
from typing import Callable, List

from gistwatch.adapters.base import GistHostAdapter
from gistwatch.models import Gist

LOG = logging.getLogger("gistwatch.services.gist_source")

DEFAULT_COMMENT_FETCH_DELAY = 3.0


class RemoteGistSource:
    """Lists a user's gists, then fetches comments for those that have any.

    ``delay`` seconds are slept before every comments request (never before
    the listing) to stay under the host's rate limits. Gists without
    comments cost no request and no delay.
    """

    def __init__(
        self,
        adapter: GistHostAdapter,
        delay: float = DEFAULT_COMMENT_FETCH_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._adapter = adapter
        self._delay = delay
        self._sleep = sleep

    def fetch_all(self, username: str) -> List[Gist]:
        """Return all of the user's gists, in listing order, with comments.

        Any RemoteError propagates; no partial result is returned.
        """
        listed = self._adapter.list_gists(username)
        LOG.info("Listed %d gists for %s", len(listed), username)
        gists: List[Gist] = []
        for gist in listed:
            if not gist.has_comments:
                gists.append(gist)
                continue
            if self._delay > 0:
                self._sleep(self._delay)
            comments = self._adapter.list_comments(gist)
            LOG.debug("Fetched %d comments for %s", len(comments), gist.html_url or gist.url)
            gists.append(gist.with_comments(comments))
        return gists
