"""
Configuration management for the Game On! account service client.

This module handles configuration from multiple sources with the following
precedence (highest to lowest):

1. Command-line arguments (--server, --ca-cert, --token, --timeout)
2. Environment variables (GAMEON_ACCOUNTS_URL, GAMEON_CA_CERT, GAMEON_JWT,
   GAMEON_REQUEST_TIMEOUT)
3. Default values

The configuration is immutable once created, so a single ServiceConfig can
be shared by every caller of an AccountServiceClient.

Example:
    # Create config from CLI args
    config = ServiceConfig.from_args(["--server", "https://gameon.example.org/players/v1"])

    # Access configuration
    print(config.base_url)  # "https://gameon.example.org/players/v1"
    print(config.timeout)   # 15.0 (default)
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# DEFAULT CONFIGURATION VALUES
# =============================================================================

# Default account service URL, matching a local Game On! player service.
DEFAULT_BASE_URL = "http://localhost:9080"

# Total per-request timeout in seconds.
DEFAULT_TIMEOUT = 15.0

# Environment variable names for configuration.
ENV_BASE_URL = "GAMEON_ACCOUNTS_URL"
ENV_CA_CERT = "GAMEON_CA_CERT"
ENV_TOKEN = "GAMEON_JWT"
ENV_TIMEOUT = "GAMEON_REQUEST_TIMEOUT"
ENV_LOG_LEVEL = "GAMEON_LOG_LEVEL"


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================


@dataclass(frozen=True)
class ServiceConfig:
    """
    Immutable configuration for an AccountServiceClient.

    Attributes:
        base_url: Base URL of the account service. Requests go to
                  ``<base_url>/accounts`` and ``<base_url>/accounts/<id>``.
                  Trailing slashes are stripped.
        ca_cert_path: Path to a PEM file holding the CA certificate(s) the
                      server must chain to. Empty string means "use the
                      default trust store".
        auth_token: Token sent verbatim in the ``gameon-jwt`` header. Empty
                    string means "send no token".
        timeout: Total per-request timeout in seconds.

    Example:
        config = ServiceConfig(base_url="https://localhost:9443/players/v1")
    """

    base_url: str
    ca_cert_path: str = ""
    auth_token: str = ""
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        """
        Validate configuration values after initialization.

        Raises:
            ValueError: If base_url is empty or timeout is not positive.
        """
        if not self.base_url or not self.base_url.strip("/"):
            raise ValueError("base_url cannot be empty")

        if self.timeout <= 0:
            raise ValueError("timeout must be a positive number")

        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def pins_certificate(self) -> bool:
        """True when the server certificate is checked against a private CA."""
        return bool(self.ca_cert_path)

    @property
    def has_token(self) -> bool:
        """True when requests carry a ``gameon-jwt`` header."""
        return bool(self.auth_token)

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """
        Register the connection options on an argument parser.

        Every option defaults to None so that from_namespace() can tell
        "not given" apart from an explicit empty value.
        """
        parser.add_argument(
            "--server",
            "-s",
            dest="base_url",
            default=None,
            help=f"Account service base URL (default: {DEFAULT_BASE_URL})",
        )
        parser.add_argument(
            "--ca-cert",
            dest="ca_cert_path",
            default=None,
            help="PEM file with the CA certificate the server must chain to",
        )
        parser.add_argument(
            "--token",
            dest="auth_token",
            default=None,
            help="Token sent in the gameon-jwt header",
        )
        parser.add_argument(
            "--timeout",
            "-t",
            type=float,
            default=None,
            help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT})",
        )

    @classmethod
    def from_namespace(cls, parsed: argparse.Namespace) -> ServiceConfig:
        """
        Build a ServiceConfig from parsed arguments, falling back to the
        environment and then to defaults.
        """
        base_url = getattr(parsed, "base_url", None)
        if base_url is None:
            base_url = os.environ.get(ENV_BASE_URL) or DEFAULT_BASE_URL

        ca_cert_path = getattr(parsed, "ca_cert_path", None)
        if ca_cert_path is None:
            ca_cert_path = os.environ.get(ENV_CA_CERT, "")

        auth_token = getattr(parsed, "auth_token", None)
        if auth_token is None:
            auth_token = os.environ.get(ENV_TOKEN, "")

        timeout = getattr(parsed, "timeout", None)
        if timeout is None:
            if ENV_TIMEOUT in os.environ:
                timeout = float(os.environ[ENV_TIMEOUT])
            else:
                timeout = DEFAULT_TIMEOUT

        return cls(
            base_url=base_url,
            ca_cert_path=ca_cert_path,
            auth_token=auth_token,
            timeout=timeout,
        )

    @classmethod
    def from_args(cls, args: Sequence[str] | None = None) -> ServiceConfig:
        """
        Create a ServiceConfig from command-line arguments.

        Args:
            args: Command-line arguments to parse. If None, uses sys.argv[1:].

        Returns:
            ServiceConfig: A fully populated configuration object.

        Example:
            config = ServiceConfig.from_args(["--server", "http://10.0.0.5:9080"])
        """
        parser = argparse.ArgumentParser(
            prog="gameon-accounts",
            description="Game On! account service connection settings",
        )
        cls.add_arguments(parser)
        parsed = parser.parse_args(args)
        return cls.from_namespace(parsed)
