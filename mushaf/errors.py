"""
Error taxonomy for the page-layout pipeline.
"""


class MushafError(Exception):
    """Base exception for page-layout failures."""

    code = "MushafError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class OutOfRange(MushafError):
    """Page number outside 1..604. Caller error, never retried."""
    code = "OutOfRange"


class StoreNotFound(MushafError):
    """Local word store is missing, unreadable or disabled."""
    code = "NotFound"


class PageNotFound(MushafError):
    """A reachable source returned no rows for the page."""
    code = "PageNotFound"


class InvalidHandle(MushafError):
    """Query against a closed or never-opened store handle."""
    code = "InvalidHandle"


class RemoteUnavailable(MushafError):
    """Network failure, timeout or malformed payload from the remote API."""
    code = "RemoteUnavailable"
