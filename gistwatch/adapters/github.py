"""GitHub gists API adapter."""

import logging
from typing import Any, Dict, List

import requests

from gistwatch.adapters.base import GistHostAdapter
from gistwatch.errors import RemoteError
from gistwatch.models import Comment, Gist
from gistwatch.utils import parse_timestamp

LOG = logging.getLogger("gistwatch.adapters.github")


def _gist_from_api(data: Dict[str, Any]) -> Gist:
    return Gist(
        url=data.get("url") or "",
        description=data.get("description") or "",
        html_url=data.get("html_url") or "",
        comments_url=data.get("comments_url") or "",
        comment_count=int(data.get("comments") or 0),
    )


def _comment_from_api(data: Dict[str, Any]) -> Comment:
    user = data.get("user") or {}
    return Comment(
        author=user.get("login") or "",
        body=data.get("body") or "",
        updated_at=parse_timestamp(data.get("updated_at") or data.get("created_at") or ""),
    )


class GitHubAdapter(GistHostAdapter):
    """GitHub API implementation."""

    def __init__(
        self,
        token: str | None = None,
        api_url: str = "https://api.github.com",
        timeout: int = 30,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Accept"] = "application/vnd.github.v3+json"
        if token:
            self._session.headers["Authorization"] = f"token {token}"

    def _get_json(self, url: str) -> Any:
        """GET url and return parsed JSON; anything but 200 raises RemoteError."""
        LOG.debug("GET %s", url)
        try:
            resp = self._session.request("GET", url, timeout=self._timeout)
        except requests.RequestException as e:
            raise RemoteError(None, str(e)) from e
        if resp.status_code != 200:
            raise RemoteError(resp.status_code, resp.text or resp.reason or "")
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteError(resp.status_code, f"Invalid JSON body: {e}") from e

    def list_gists(self, username: str) -> List[Gist]:
        data = self._get_json(f"{self._api_url}/users/{username}/gists") or []
        return [_gist_from_api(d) for d in data]

    def list_comments(self, gist: Gist) -> List[Comment]:
        data = self._get_json(gist.comments_url) or []
        return [_comment_from_api(d) for d in data]
