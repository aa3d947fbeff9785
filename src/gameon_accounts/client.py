"""
HTTP client for the Game On! player account service.

This module provides a synchronous client for the service's ``accounts``
collection. It handles certificate pinning, token headers, and the mapping
of HTTP status codes onto results and typed exceptions.

The underlying httpx transport is built once, when the client is
constructed, and reused for every call. Construction is therefore the only
point that reads the CA certificate file; a missing or invalid file raises
ConfigError there instead of failing on first use.

    with create_client("https://localhost:9443/players/v1", "ca.pem", token) as client:
        if not client.account_exists("dummy.DevUser"):
            client.create_account(AccountCreateRequest(name="DevUser", favorite_color="blue"))

Status handling by operation:
    list_accounts   200 -> records            other -> BadStatusError
    get_account     200 -> record             other -> BadStatusError
    account_exists  200 -> True, 404 -> False other -> UnknownStatusError
    create_account  200/201 -> record         other -> BadStatusError
    delete_account  200/204 -> True, 404 -> False, 403 -> UnauthorizedError,
                    other -> UnknownStatusError
"""

from __future__ import annotations

import json
import logging
import ssl
import time
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import ValidationError

from gameon_accounts.config import DEFAULT_TIMEOUT, ServiceConfig
from gameon_accounts.errors import (
    BadStatusError,
    ConfigError,
    DecodeError,
    EncodeError,
    TransportError,
    UnauthorizedError,
    UnknownStatusError,
)
from gameon_accounts.models import (
    AccountCreateRequest,
    AccountRecord,
    decode_account,
    decode_account_list,
)

logger = logging.getLogger(__name__)

# Header carrying the raw token. Not a bearer scheme; the service reads this
# exact name.
AUTH_HEADER = "gameon-jwt"

ACCOUNTS_PATH = "/accounts"


def load_ca_context(ca_cert_path: str) -> ssl.SSLContext:
    """
    Build an SSL context that trusts only the CAs in ``ca_cert_path``.

    The system trust store is not loaded, so servers whose certificate does
    not chain to one of these CAs are rejected. Strict X.509 checking is
    turned off so private CAs without key identifier extensions still
    verify; chain and hostname checks are unaffected.

    Args:
        ca_cert_path: Path to a PEM file with one or more CA certificates.

    Returns:
        A client-side SSLContext with hostname checking enabled.

    Raises:
        ConfigError: If the file is missing, unreadable, or holds no
                     usable certificate.
    """
    try:
        context = ssl.create_default_context(cafile=ca_cert_path)
    except OSError as e:
        # ssl.SSLError is an OSError: covers missing files and bad PEM alike
        raise ConfigError(
            message="Could not load server CA certificate",
            detail=f"{ca_cert_path}: {e}",
        ) from e

    # Python 3.13+ enables this by default
    context.verify_flags &= ~ssl.VERIFY_X509_STRICT
    return context


@dataclass
class AccountServiceClient:
    """
    Synchronous client for the account service ``accounts`` collection.

    Each public method performs exactly one HTTP round trip and blocks until
    the response is read or the configured timeout expires. Nothing is
    retried. The client holds only immutable configuration and a shared
    httpx.Client, so one instance may be used from several threads.

    Attributes:
        config: Connection settings (URL, CA file, token, timeout).

    Example:
        client = AccountServiceClient(ServiceConfig(base_url="http://localhost:9080"))
        for account in client.list_accounts():
            print(account.id, account.name)
        client.close()
    """

    config: ServiceConfig

    _http_client: httpx.Client = field(init=False, repr=False)

    def __post_init__(self) -> None:
        verify: ssl.SSLContext | bool = True
        if self.config.pins_certificate:
            verify = load_ca_context(self.config.ca_cert_path)

        headers = {"Content-Type": "application/json"}
        if self.config.has_token:
            headers[AUTH_HEADER] = self.config.auth_token

        self._http_client = httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            verify=verify,
            headers=headers,
            follow_redirects=True,
        )
        logger.debug(
            "Account client ready for %s (ca_pinned=%s, token=%s, timeout=%.1fs)",
            self.config.base_url,
            self.config.pins_certificate,
            self.config.has_token,
            self.config.timeout,
        )

    # -------------------------------------------------------------------------
    # Resource management
    # -------------------------------------------------------------------------

    def __enter__(self) -> AccountServiceClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._http_client.close()

    @property
    def http_client(self) -> httpx.Client:
        """The shared httpx.Client used for every request."""
        return self._http_client

    # -------------------------------------------------------------------------
    # Account operations
    # -------------------------------------------------------------------------

    def list_accounts(self) -> list[AccountRecord]:
        """
        Fetch every account in the collection.

        Returns:
            list: AccountRecord objects in the order the server sent them.

        Raises:
            BadStatusError: If the server answers with anything but 200.
            DecodeError: If the body is not a JSON array of accounts.
            TransportError: If no response was received.
        """
        response = self._send("GET", ACCOUNTS_PATH)

        if response.status_code != 200:
            raise BadStatusError(
                message="Failed to list accounts",
                status_code=response.status_code,
                detail=f"Bad status {response.status_code}",
            )

        try:
            accounts = decode_account_list(response.content)
        except ValidationError as e:
            logger.warning("Failed to parse account list response: %s", response.text)
            raise DecodeError(
                message="Failed to list accounts",
                status_code=response.status_code,
                detail=str(e),
            ) from e

        return accounts or []

    def get_account(self, account_id: str) -> AccountRecord:
        """
        Fetch a single account.

        Args:
            account_id: Identifier of the account (its ``_id``).

        Returns:
            AccountRecord: The decoded account.

        Raises:
            ValueError: If account_id is empty.
            BadStatusError: If the server answers with anything but 200. The
                            body is not decoded in that case.
            DecodeError: If the body is not a JSON account object.
            TransportError: If no response was received.
        """
        response = self._send("GET", self._account_path(account_id))

        if response.status_code != 200:
            raise BadStatusError(
                message=f"Failed to get account '{account_id}'",
                status_code=response.status_code,
                detail=f"Bad status {response.status_code}",
            )

        return self._decode_account(response, f"Failed to get account '{account_id}'")

    def account_exists(self, account_id: str) -> bool:
        """
        Check whether an account exists.

        Args:
            account_id: Identifier of the account.

        Returns:
            bool: True on 200, False on 404.

        Raises:
            ValueError: If account_id is empty.
            UnknownStatusError: For any other status (a 500 is an error,
                                not a missing account).
            TransportError: If no response was received.
        """
        response = self._send("GET", self._account_path(account_id))

        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False

        raise UnknownStatusError(
            message=f"Could not check account '{account_id}'",
            status_code=response.status_code,
            detail=f"Unknown status {response.status_code}",
        )

    def create_account(self, request: AccountCreateRequest) -> AccountRecord:
        """
        Create an account.

        Args:
            request: The caller-supplied fields. ``revision`` is left out of
                     the payload when empty.

        Returns:
            AccountRecord: The account as stored by the server.

        Raises:
            EncodeError: If the request cannot be serialised.
            BadStatusError: If the server answers with anything but 200/201.
            DecodeError: If the body is not a JSON account object.
            TransportError: If no response was received.
        """
        try:
            body = json.dumps(request.to_payload(), separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodeError(
                message="Failed to encode account",
                detail=str(e),
            ) from e

        response = self._send("POST", ACCOUNTS_PATH, content=body)

        if response.status_code not in (200, 201):
            raise BadStatusError(
                message="Failed to create account",
                status_code=response.status_code,
                detail=f"Bad status {response.status_code}",
            )

        return self._decode_account(response, "Failed to create account")

    def delete_account(self, account_id: str) -> bool:
        """
        Delete an account.

        Args:
            account_id: Identifier of the account.

        Returns:
            bool: True on 200/204, False on 404.

        Raises:
            ValueError: If account_id is empty.
            UnauthorizedError: On 403.
            UnknownStatusError: For any other status.
            TransportError: If no response was received.
        """
        response = self._send("DELETE", self._account_path(account_id))

        if response.status_code in (200, 204):
            return True
        if response.status_code == 404:
            return False
        if response.status_code == 403:
            raise UnauthorizedError(
                message=f"Not allowed to delete account '{account_id}'",
                status_code=403,
                detail="Unauthorized",
            )

        raise UnknownStatusError(
            message=f"Could not delete account '{account_id}'",
            status_code=response.status_code,
            detail=f"Unknown status {response.status_code}",
        )

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _account_path(account_id: str) -> str:
        if not account_id:
            raise ValueError("account_id cannot be empty")
        return f"{ACCOUNTS_PATH}/{account_id}"

    def _send(self, method: str, path: str, content: bytes | None = None) -> httpx.Response:
        """
        Perform one request and return the fully read response.

        The configured timeout bounds the whole call. httpx timeouts apply
        per read, so the body is streamed and the deadline is checked after
        the headers and after every chunk.

        Raises:
            TransportError: Wrapping any httpx request error (connect, TLS,
                            timeout, redirect loop), or when the deadline
                            passes before the body is fully read.
        """
        deadline = time.monotonic() + self.config.timeout
        try:
            with self.http_client.stream(method, path, content=content) as streamed:
                self._check_deadline(deadline, method, path)
                body = bytearray()
                for chunk in streamed.iter_bytes():
                    body.extend(chunk)
                    self._check_deadline(deadline, method, path)
        except httpx.RequestError as e:
            raise TransportError(
                message=f"{method} {path} failed",
                status_code=0,
                detail=f"Cannot reach account service at {self.config.base_url}: {e}",
            ) from e

        # The body is already decoded, so drop the encoding header
        headers = [
            (name, value)
            for name, value in streamed.headers.multi_items()
            if name.lower() != "content-encoding"
        ]
        response = httpx.Response(
            streamed.status_code,
            headers=headers,
            content=bytes(body),
            request=streamed.request,
        )
        logger.debug("%s %s -> %d", method, response.url, response.status_code)
        return response

    def _check_deadline(self, deadline: float, method: str, path: str) -> None:
        if time.monotonic() > deadline:
            raise TransportError(
                message=f"{method} {path} failed",
                status_code=0,
                detail=f"No complete response within {self.config.timeout:.1f}s",
            )

    @staticmethod
    def _decode_account(response: httpx.Response, message: str) -> AccountRecord:
        try:
            return decode_account(response.content)
        except ValidationError as e:
            raise DecodeError(
                message=message,
                status_code=response.status_code,
                detail=str(e),
            ) from e


def create_client(
    base_url: str,
    ca_cert_path: str = "",
    auth_token: str = "",
    timeout: float = DEFAULT_TIMEOUT,
) -> AccountServiceClient:
    """
    Build a ready-to-use AccountServiceClient.

    Empty strings disable the corresponding optional feature: no
    ``ca_cert_path`` means the default trust store, no ``auth_token`` means
    no ``gameon-jwt`` header.

    Raises:
        ValueError: If base_url is empty or timeout is not positive.
        ConfigError: If ca_cert_path is set but cannot be loaded.
    """
    config = ServiceConfig(
        base_url=base_url,
        ca_cert_path=ca_cert_path,
        auth_token=auth_token,
        timeout=timeout,
    )
    return AccountServiceClient(config)
