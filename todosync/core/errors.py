"""
Errors raised by Remote Store access.
"""

from typing import Optional


class RemoteStoreError(Exception):
    """A Remote Store request did not succeed"""

    def __init__(self, message: str, status: Optional[int] = None, detail: str = ""):
        super().__init__(message)
        self.message = message
        self.status = status
        self.detail = detail


class NotFoundError(RemoteStoreError):
    """The requested todo id is unknown to the Remote Store"""
