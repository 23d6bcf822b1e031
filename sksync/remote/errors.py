# SKSYNC Remote Errors
# Exceptions raised by the version history client

from typing import Optional

import httpx


class RemoteError(Exception):
    """Exception raised when the version store rejects or fails a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class AuthError(RemoteError):
    """No usable credential, or the server rejected it."""


def error_message(response: httpx.Response) -> Optional[str]:
    """Extract the server-provided error message from a response, if any."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        message = data.get("error") or data.get("message")
        if isinstance(message, str) and message:
            return message
    return None
