"""Abstract base for gist host adapters."""

from abc import ABC, abstractmethod
from typing import List

from gistwatch.models import Comment, Gist


class GistHostAdapter(ABC):
    """Abstract interface for a host serving a user's gists and their comments.

    Implementations raise RemoteError on any non-success response.
    """

    @abstractmethod
    def list_gists(self, username: str) -> List[Gist]:
        """List the user's gists (without comments), in host order."""
        ...

    @abstractmethod
    def list_comments(self, gist: Gist) -> List[Comment]:
        """Fetch the comments of a gist, in host order."""
        ...
