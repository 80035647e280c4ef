"""Account operations: registration, login, deposits, withdrawals, PIN change."""

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable

from atm_ledger.exceptions import (
    AccountLockedError,
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidCredentialsError,
    ValidationError,
)
from atm_ledger.models import (
    TIMESTAMP_FORMAT,
    Account,
    AccountType,
    Transaction,
    TransactionType,
)
from atm_ledger.persistence.repository import CsvLedgerRepository
from atm_ledger.security import digest, is_valid_pin, verify_pin
from atm_ledger.store.ledger import LedgerStore

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def parse_amount(value: Decimal | int | str) -> Decimal:
    """Convert user input to a two-place decimal amount.

    Strings may carry surrounding whitespace and thousands separators
    (``"1,250.00"``). Floats are rejected to avoid binary rounding.

    Raises
    ------
    InvalidAmountError
        If the value is not a finite number.
    """
    if isinstance(value, (bool, float)):
        raise InvalidAmountError(f"Unsupported amount type: {type(value).__name__}")
    if isinstance(value, str):
        value = value.replace(",", "").strip()
    try:
        amount = Decimal(value)
        if amount.is_finite():
            return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidAmountError(f"Not a valid amount: {value!r}") from e
    raise InvalidAmountError(f"Not a valid amount: {value!r}")


def parse_account_type(value: AccountType | str) -> AccountType:
    """Resolve an account type by value or name, case-insensitively."""
    if isinstance(value, AccountType):
        return value
    text = (value or "").strip()
    for member in AccountType:
        if text.lower() in (member.value.lower(), member.name.lower()):
            return member
    raise ValidationError(f"Unknown account type: {value!r}")


class AccountService:
    """Enforce the ledger's business rules and record transactions.

    Every failed check raises before anything is mutated. After each
    successful mutation the affected files are rewritten through the
    repository; a save failure propagates as ``PersistenceError`` but the
    in-memory change stays applied.

    Parameters
    ----------
    store : LedgerStore
        Ledger to operate on.
    repository : CsvLedgerRepository | None
        Where to persist changes. ``None`` keeps everything in memory.
    clock : Callable[[], datetime] | None
        Source of transaction timestamps (default ``datetime.now``).
    """

    def __init__(
        self,
        store: LedgerStore,
        repository: CsvLedgerRepository | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.repository = repository
        self.clock = clock or datetime.now

    @classmethod
    def from_repository(cls, repository: CsvLedgerRepository) -> "AccountService":
        """Load the ledger from ``repository`` and return a service bound to it."""
        return cls(repository.load_all(), repository)

    def register(
        self,
        name: str,
        account_type: AccountType | str,
        pin: str,
        pin_confirm: str,
    ) -> Account:
        """Open a new account with a zero balance.

        Parameters
        ----------
        name : str
            Holder name; surrounding whitespace is stripped.
        account_type : AccountType | str
            Savings or Checking.
        pin : str
            Four-digit PIN.
        pin_confirm : str
            Must equal ``pin``.

        Returns
        -------
        Account
            The newly created account.

        Raises
        ------
        ValidationError
            On the first failed check; nothing is created.
        """
        holder = (name or "").strip()
        if not holder:
            raise ValidationError("Enter full name")
        if not pin:
            raise ValidationError("Enter PIN")
        if pin != pin_confirm:
            raise ValidationError("PINs do not match")
        if not is_valid_pin(pin):
            raise ValidationError("PIN must be 4 digits")
        acc_type = parse_account_type(account_type)

        account = Account(
            account_number=self.store.next_account_number(),
            holder_name=holder,
            account_type=acc_type,
            balance=Decimal("0.00"),
            pin_hash=digest(pin),
        )
        self.store.insert_account(account)
        logger.info("Registered account %s (%s)", account.account_number, acc_type.value)

        # Account creation is not a transaction; only the accounts file changes
        if self.repository is not None:
            self.repository.save_accounts(self.store)
        return account

    def authenticate(self, account_number: str, pin: str) -> Account:
        """Check an account number and PIN and return the account.

        Raises
        ------
        ValidationError
            If either value is empty.
        AccountNotFoundError
            If no account has that number.
        AccountLockedError
            If the account is locked.
        InvalidCredentialsError
            If the PIN is wrong.
        """
        account_number = (account_number or "").strip()
        if not account_number or not pin:
            raise ValidationError("Enter account and PIN")

        account = self.store.get_account(account_number)
        if account is None:
            logger.warning("Login failed: account %s not found", account_number)
            raise AccountNotFoundError(f"Account {account_number} not found")
        if account.locked:
            logger.warning("Login refused: account %s is locked", account_number)
            raise AccountLockedError(f"Account {account_number} is locked")
        if not verify_pin(pin, account.pin_hash):
            logger.warning("Login failed: invalid PIN for %s", account_number)
            raise InvalidCredentialsError("Invalid PIN")
        return account

    def deposit(self, account: Account, amount: Decimal | int | str) -> Transaction:
        """Credit ``amount`` to the account."""
        value = self._positive_amount(amount)
        account.balance += value
        return self._record(account, TransactionType.DEPOSIT, value)

    def withdraw(self, account: Account, amount: Decimal | int | str) -> Transaction:
        """Debit ``amount`` from the account.

        Raises
        ------
        InvalidAmountError
            If the amount is not positive.
        InsufficientFundsError
            If the amount exceeds the balance.
        """
        value = self._positive_amount(amount)
        if value > account.balance:
            logger.warning(
                "Withdrawal of %s refused for %s: balance %s",
                value,
                account.account_number,
                account.balance,
            )
            raise InsufficientFundsError("Insufficient balance")
        account.balance -= value
        return self._record(account, TransactionType.WITHDRAW, value)

    def change_pin(
        self,
        account: Account,
        old_pin: str,
        new_pin: str,
        new_pin_confirm: str,
    ) -> Transaction:
        """Replace the account's PIN after checking the current one.

        Raises
        ------
        InvalidCredentialsError
            If ``old_pin`` is wrong.
        ValidationError
            If the new PIN is not four digits or does not match its
            confirmation.
        """
        if not verify_pin(old_pin or "", account.pin_hash):
            logger.warning("PIN change refused for %s: current PIN incorrect", account.account_number)
            raise InvalidCredentialsError("Current PIN incorrect")
        if new_pin != new_pin_confirm or not is_valid_pin(new_pin):
            raise ValidationError("New PIN must be 4 digits and match confirmation")

        account.pin_hash = digest(new_pin)
        return self._record(account, TransactionType.PIN_CHANGE, Decimal("0.00"))

    def get_account(self, account_number: str) -> Account:
        """Look up an account, raising if it does not exist."""
        account_number = (account_number or "").strip()
        account = self.store.get_account(account_number)
        if account is None:
            raise AccountNotFoundError(f"Account {account_number} not found")
        return account

    def transactions_for(self, account: Account) -> list[Transaction]:
        """Get the account's transaction history, most recent first."""
        return self.store.transactions_for(account.account_number)

    def _positive_amount(self, amount: Decimal | int | str) -> Decimal:
        value = parse_amount(amount)
        if value <= 0:
            raise InvalidAmountError("Enter amount > 0")
        return value

    def _record(
        self,
        account: Account,
        transaction_type: TransactionType,
        amount: Decimal,
    ) -> Transaction:
        """Append a transaction for an applied change and persist both files."""
        transaction = Transaction(
            transaction_id=self.store.next_transaction_id(),
            account_number=account.account_number,
            transaction_type=transaction_type,
            amount=amount,
            timestamp=self.clock().strftime(TIMESTAMP_FORMAT),
        )
        self.store.append_transaction(transaction)
        logger.info(
            "%s %s on %s %s",
            transaction.transaction_id,
            transaction_type.value,
            account.account_number,
            amount,
        )
        if self.repository is not None:
            self.repository.save_all(self.store)
        return transaction
