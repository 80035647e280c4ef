"""Tests for custom exception hierarchy."""

import pytest

from atm_ledger.exceptions import (
    AccountLockedError,
    AccountNotFoundError,
    AtmError,
    ConfigurationError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    PersistenceError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_atm_error_is_exception(self) -> None:
        assert isinstance(AtmError("test"), Exception)

    @pytest.mark.parametrize(
        "exc_type",
        [
            ValidationError,
            AccountNotFoundError,
            InvalidCredentialsError,
            AccountLockedError,
            InvalidAmountError,
            InsufficientFundsError,
            NotAuthenticatedError,
            PersistenceError,
            ConfigurationError,
        ],
    )
    def test_is_atm_error(self, exc_type: type[AtmError]) -> None:
        assert isinstance(exc_type("test"), AtmError)

    def test_business_errors_are_distinct(self) -> None:
        assert not issubclass(InsufficientFundsError, InvalidAmountError)
        assert not issubclass(AccountLockedError, InvalidCredentialsError)

    def test_exception_message(self) -> None:
        err = AccountNotFoundError("Account ACC1001 not found")
        assert str(err) == "Account ACC1001 not found"
