"""Gist host adapters."""

from gistwatch.adapters.base import GistHostAdapter
from gistwatch.adapters.github import GitHubAdapter

__all__ = ["GistHostAdapter", "GitHubAdapter"]
