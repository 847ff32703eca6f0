"""
debridhub Exceptions
"""
from typing import Optional


class DebridError(Exception):
    """Base error for debrid provider operations"""


class DebridAPIError(DebridError):
    """
    A user-intended provider action (add, select, unrestrict, ...) failed.
    status_code is None when the request never got a response.
    """

    def __init__(self, provider: str, status_code: Optional[int], detail: str = "Unknown"):
        self.provider = provider
        self.status_code = status_code
        self.detail = detail
        status = status_code if status_code is not None else "no response"
        super().__init__(f"{provider} API error: {status} - {detail}")
