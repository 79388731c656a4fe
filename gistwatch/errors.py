"""Error taxonomy for a gistwatch run.

Every error is fatal for the run: nothing is retried and the watermark is
not advanced.
"""


class GistwatchError(Exception):
    """Base class for gistwatch errors."""

    pass


class TimestampParseError(GistwatchError):
    """Raised when a timestamp (comment or stored watermark) cannot be parsed."""

    pass


class StoreReadError(GistwatchError):
    """Raised when the stored watermark is malformed or unreadable."""

    pass


class StoreWriteError(GistwatchError):
    """Raised when the watermark location is not writable."""

    pass


class RemoteError(GistwatchError):
    """Raised when the gist host returns a non-success response."""

    def __init__(self, status_code: int | None, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"{status_code}: {body}")


class DispatchError(GistwatchError):
    """Raised when the digest cannot be submitted to the mail relay."""

    pass
