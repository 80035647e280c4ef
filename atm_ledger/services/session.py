"""Single-user ATM session on top of the account service."""

import logging
from decimal import Decimal
from enum import Enum

from atm_ledger.exceptions import NotAuthenticatedError
from atm_ledger.models import Account, AccountType, Transaction
from atm_ledger.services.account_service import AccountService

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    ANONYMOUS = "ANONYMOUS"
    AUTHENTICATED = "AUTHENTICATED"


class Session:
    """Track which account, if any, is logged in.

    Registering or logging in moves the session to AUTHENTICATED; logging
    out returns it to ANONYMOUS. Money and PIN operations act on the
    current account only.
    """

    def __init__(self, service: AccountService) -> None:
        self.service = service
        self.account: Account | None = None

    @property
    def state(self) -> SessionState:
        """Current session state."""
        if self.account is None:
            return SessionState.ANONYMOUS
        return SessionState.AUTHENTICATED

    def register(
        self,
        name: str,
        account_type: AccountType | str,
        pin: str,
        pin_confirm: str,
    ) -> Account:
        """Open an account and log in as its holder."""
        self.account = self.service.register(name, account_type, pin, pin_confirm)
        return self.account

    def login(self, account_number: str, pin: str) -> Account:
        """Authenticate and make the account current."""
        account = self.service.authenticate(account_number, pin)
        self.account = account
        logger.info("Session opened for %s", account.account_number)
        return account

    def logout(self) -> None:
        """Return to the anonymous state."""
        if self.account is not None:
            logger.info("Session closed for %s", self.account.account_number)
        self.account = None

    def require_account(self) -> Account:
        """Return the current account or raise if nobody is logged in."""
        if self.account is None:
            raise NotAuthenticatedError("Login first")
        return self.account

    def balance(self) -> Decimal:
        return self.require_account().balance

    def deposit(self, amount: Decimal | int | str) -> Transaction:
        return self.service.deposit(self.require_account(), amount)

    def withdraw(self, amount: Decimal | int | str) -> Transaction:
        return self.service.withdraw(self.require_account(), amount)

    def change_pin(self, old_pin: str, new_pin: str, new_pin_confirm: str) -> Transaction:
        return self.service.change_pin(self.require_account(), old_pin, new_pin, new_pin_confirm)

    def history(self) -> list[Transaction]:
        """Current account's transactions, most recent first."""
        return self.service.transactions_for(self.require_account())
