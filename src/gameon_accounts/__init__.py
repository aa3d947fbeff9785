"""Game On! account service client.

A small synchronous client for the player ``accounts`` collection of a
Game On! style service: list, get, check, create and delete player
accounts over HTTP(S), with optional CA pinning and ``gameon-jwt`` token
authorization.

Example:
    from gameon_accounts import AccountCreateRequest, create_client

    with create_client("http://localhost:9080", auth_token=token) as client:
        record = client.create_account(AccountCreateRequest(name="DevUser"))

Version Management
------------------
``__version__`` is read from the installed package metadata. The single
source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from gameon_accounts.client import AUTH_HEADER, AccountServiceClient, create_client
from gameon_accounts.config import ServiceConfig
from gameon_accounts.errors import (
    AccountServiceError,
    BadStatusError,
    ConfigError,
    DecodeError,
    EncodeError,
    TransportError,
    UnauthorizedError,
    UnknownStatusError,
)
from gameon_accounts.models import AccountCreateRequest, AccountRecord, Credentials, Location

try:
    __version__: str = version("gameon-accounts")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "AUTH_HEADER",
    "AccountCreateRequest",
    "AccountRecord",
    "AccountServiceClient",
    "AccountServiceError",
    "BadStatusError",
    "ConfigError",
    "Credentials",
    "DecodeError",
    "EncodeError",
    "Location",
    "ServiceConfig",
    "TransportError",
    "UnauthorizedError",
    "UnknownStatusError",
    "create_client",
    "__version__",
]
