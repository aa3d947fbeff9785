"""
Shared pytest fixtures for the account client test suite.

This module provides fixtures that are automatically available to all test files:
- ServiceConfig instances with and without a token
- AccountServiceClient instances bound to the fake service URL
- Paths to the TLS certificate fixtures

HTTP traffic is mocked with respx; the TLS tests start real local servers.
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from gameon_accounts.client import AccountServiceClient
from gameon_accounts.config import ServiceConfig
from tests.constants import TEST_BASE_URL, TEST_TOKEN

TLS_FIXTURES = Path(__file__).parent / "fixtures" / "tls"

# ============================================================================
# CONFIG FIXTURES
# ============================================================================


@pytest.fixture
def config() -> ServiceConfig:
    """Configuration with a token and no CA pinning."""
    return ServiceConfig(base_url=TEST_BASE_URL, auth_token=TEST_TOKEN, timeout=5.0)


@pytest.fixture
def anonymous_config() -> ServiceConfig:
    """Configuration without a token."""
    return ServiceConfig(base_url=TEST_BASE_URL, timeout=5.0)


# ============================================================================
# CLIENT FIXTURES
# ============================================================================


@pytest.fixture
def client(config: ServiceConfig) -> Generator[AccountServiceClient, None, None]:
    """An API client that sends the test token."""
    with AccountServiceClient(config) as client:
        yield client


@pytest.fixture
def anonymous_client(
    anonymous_config: ServiceConfig,
) -> Generator[AccountServiceClient, None, None]:
    """An API client that sends no token."""
    with AccountServiceClient(anonymous_config) as client:
        yield client


# ============================================================================
# TLS FIXTURES
# ============================================================================


@pytest.fixture(scope="session")
def tls_dir() -> Path:
    """
    Directory holding the TLS test certificates.

    Contents:
        trusted-ca.pem                      CA the client is pinned to
        trusted-server.pem/.key             127.0.0.1 cert signed by that CA
        untrusted-server.pem/.key           127.0.0.1 cert from an unrelated CA
        legacy-ca.pem                       CA without strict X.509 extensions
        legacy-server.pem/.key              127.0.0.1 cert signed by the legacy CA
    """
    return TLS_FIXTURES
