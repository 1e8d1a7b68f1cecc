"""Errors raised by the client."""
from typing import Any


class MeiliMeloError(Exception):
    """Base class for every error raised by meilimelo."""

    pass


class TransportError(MeiliMeloError):
    """Connection or timeout failure while talking to the instance."""

    pass


class SchemaMismatch(MeiliMeloError):
    """Response payload does not fit the declared schema."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class ServiceError(MeiliMeloError):
    """Non-2xx response from the instance.

    ``code``, ``kind`` and ``link`` mirror the ``errorCode``, ``errorType``
    and ``errorLink`` fields of the error body when the instance sends them.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        code: str | None = None,
        kind: str | None = None,
        link: str | None = None,
    ) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.code = code
        self.kind = kind
        self.link = link


class NotFound(ServiceError):
    """Index or document does not exist (404)."""

    pass


class AuthError(ServiceError):
    """Missing or invalid secret key (401/403)."""

    pass


def error_for_status(status_code: int, body: Any) -> ServiceError:
    """Build the ServiceError subclass matching a failed response."""
    message = ""
    code = kind = link = None
    if isinstance(body, dict):
        message = str(body.get("message", ""))
        code = body.get("errorCode") or body.get("code")
        kind = body.get("errorType") or body.get("type")
        link = body.get("errorLink") or body.get("link")
    elif body:
        message = str(body)
    if status_code == 404:
        cls: type[ServiceError] = NotFound
    elif status_code in (401, 403):
        cls = AuthError
    else:
        cls = ServiceError
    return cls(status_code, message, code=code, kind=kind, link=link)
