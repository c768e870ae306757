from typing import Optional


class FetchError(Exception):
    """Base class for failures of an outbound data request."""
    pass

class RequestFailedError(FetchError):
    pass

class HttpStatusError(FetchError):
    def __init__(self, status: int, reason: Optional[str] = None):
        self.status = status
        super().__init__(f"API request failed with status {status}" + (f": {reason}" if reason else ""))

class MalformedBodyError(FetchError):
    pass
