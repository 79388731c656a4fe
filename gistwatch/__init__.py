"""gistwatch: email a digest of new comments on a user's gists."""

__version__ = "0.1.0"
