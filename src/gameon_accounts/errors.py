"""
Exceptions raised by the account service client.

Every failure the client surfaces derives from AccountServiceError, so
callers can catch the whole family in one place or single out the cases
they care about:

    AccountServiceError
    ├── ConfigError          CA certificate missing, unreadable or invalid
    ├── TransportError       DNS, connect, TLS or timeout failure
    ├── BadStatusError       unexpected status on list/get/create
    ├── UnknownStatusError   unhandled status on exists/delete
    ├── UnauthorizedError    403 on delete
    ├── DecodeError          body is not JSON of the expected shape
    └── EncodeError          request payload could not be serialised

Domain outcomes ("no such account") are not errors: ``account_exists`` and
``delete_account`` report them as ``False``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AccountServiceError(Exception):
    """
    Base exception for account service failures.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the response, 0 when no response
                     was received.
        detail: Additional context (underlying error text, response body).

    Example:
        try:
            client.get_account("abc")
        except AccountServiceError as e:
            print(f"Account service error {e.status_code}: {e}")
    """

    message: str
    status_code: int = 0
    detail: str = ""

    def __str__(self) -> str:
        """Return a formatted error message."""
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class ConfigError(AccountServiceError):
    """The client configuration cannot be used (for example a bad CA file)."""


class TransportError(AccountServiceError):
    """No HTTP response was received. The httpx error is chained as __cause__."""


class BadStatusError(AccountServiceError):
    """The response status is outside the accepted set for the operation."""


class UnknownStatusError(AccountServiceError):
    """The response status is not one the operation knows how to interpret."""


class UnauthorizedError(AccountServiceError):
    """
    The service refused the operation (HTTP 403).

    Raised by ``delete_account`` when the token does not grant permission
    to remove the account.
    """


class DecodeError(AccountServiceError):
    """The response body is not valid JSON of the expected shape."""


class EncodeError(AccountServiceError):
    """The request payload could not be serialised to JSON."""
