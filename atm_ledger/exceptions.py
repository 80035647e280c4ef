"""Custom exception hierarchy for atm-ledger."""


class AtmError(Exception):
    """Base exception for all atm-ledger errors."""


class ValidationError(AtmError):
    """Raised when user input is malformed or missing."""


class AccountNotFoundError(AtmError):
    """Raised when an account number does not exist."""


class InvalidCredentialsError(AtmError):
    """Raised when a PIN does not match the stored digest."""


class AccountLockedError(AtmError):
    """Raised when a locked account attempts to log in."""


class InvalidAmountError(AtmError):
    """Raised when an amount is not a positive number."""


class InsufficientFundsError(AtmError):
    """Raised when a withdrawal exceeds the account balance."""


class NotAuthenticatedError(AtmError):
    """Raised when a session operation requires a logged-in account."""


class PersistenceError(AtmError):
    """Raised when the ledger files cannot be written."""


class ConfigurationError(AtmError):
    """Raised when configuration is invalid or missing."""
