"""Tests for the account service exception hierarchy."""

import pytest

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


@pytest.mark.unit
class TestAccountServiceError:
    """Tests for error formatting and hierarchy."""

    def test_str_with_detail(self):
        """Test detail is appended to the message."""
        error = BadStatusError(
            message="Failed to list accounts", status_code=500, detail="Bad status 500"
        )

        assert str(error) == "Failed to list accounts: Bad status 500"

    def test_str_without_detail(self):
        """Test the bare message is used when there is no detail."""
        assert str(EncodeError(message="Failed to encode account")) == "Failed to encode account"

    def test_status_code_defaults_to_zero(self):
        """Test errors without a response carry status 0."""
        assert TransportError(message="GET /accounts failed").status_code == 0

    @pytest.mark.parametrize(
        "error_cls",
        [
            BadStatusError,
            ConfigError,
            DecodeError,
            EncodeError,
            TransportError,
            UnauthorizedError,
            UnknownStatusError,
        ],
    )
    def test_all_errors_share_base(self, error_cls):
        """Test every error can be caught as AccountServiceError."""
        with pytest.raises(AccountServiceError):
            raise error_cls(message="x")

    def test_unauthorized_is_its_own_bucket(self):
        """Test a 403 is not reported as an unknown status."""
        assert not issubclass(UnauthorizedError, UnknownStatusError)
        assert not issubclass(UnknownStatusError, BadStatusError)
