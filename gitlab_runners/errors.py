from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .client import Response


class GitLabError(Exception):
    """Base class for everything this binding raises."""


class InvalidIDError(GitLabError, ValueError):
    pass


class ConfigError(GitLabError, ValueError):
    pass


class RequestOptionError(GitLabError):
    pass


class TransportError(GitLabError):
    pass


class DecodeError(GitLabError):
    def __init__(self, message: str, response: Optional["Response"] = None):
        super().__init__(message)
        self.response = response


class ErrorResponse(GitLabError):
    """
    Raised for any non-2xx status.
    `message` is whatever the server put in its `message`/`error` field,
    or the raw body text when it did not send JSON.
    """

    def __init__(self, response: "Response", message: str = ""):
        self.response = response
        self.status_code = response.status_code
        self.message = message
        req = response.raw.request
        where = f"{req.method} {req.url}" if req is not None else "request"
        text = f"{where}: {self.status_code}"
        if message:
            text += f" {message}"
        super().__init__(text)
