"""Conversion between ledger models and CSV rows."""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TypeVar

from atm_ledger.models import Account, AccountType, Transaction, TransactionType

ACCOUNT_HEADER = ["accNo", "holder", "accType", "balance", "pinHash", "locked"]
TRANSACTION_HEADER = ["txId", "accNo", "type", "amount", "time"]

E = TypeVar("E", bound=Enum)


def serialize_value(value: object) -> str:
    """Serialize a model value as CSV field text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def parse_decimal(text: str, default: Decimal = Decimal("0")) -> Decimal:
    """Parse a decimal field, falling back to ``default`` when malformed."""
    try:
        value = Decimal(text.strip())
    except InvalidOperation:
        return default
    if not value.is_finite():
        return default
    return value


def _coerce_enum(enum_type: type[E], value: str) -> E | str:
    """Return the enum member for ``value``, or the raw string if unknown."""
    try:
        return enum_type(value)
    except ValueError:
        return value


def account_to_row(account: Account) -> list[str]:
    """Convert an account to its CSV fields."""
    return [
        serialize_value(account.account_number),
        serialize_value(account.holder_name),
        serialize_value(account.account_type),
        serialize_value(account.balance),
        serialize_value(account.pin_hash),
        serialize_value(account.locked),
    ]


def account_from_row(fields: list[str]) -> Account | None:
    """Build an account from decoded CSV fields.

    Returns ``None`` for rows with fewer than six fields.
    """
    if len(fields) < len(ACCOUNT_HEADER):
        return None
    return Account(
        account_number=fields[0],
        holder_name=fields[1],
        account_type=_coerce_enum(AccountType, fields[2]),
        balance=parse_decimal(fields[3]),
        pin_hash=fields[4],
        locked=fields[5] == "1",
    )


def transaction_to_row(transaction: Transaction) -> list[str]:
    """Convert a transaction to its CSV fields."""
    return [
        serialize_value(transaction.transaction_id),
        serialize_value(transaction.account_number),
        serialize_value(transaction.transaction_type),
        serialize_value(transaction.amount),
        serialize_value(transaction.timestamp),
    ]


def transaction_from_row(fields: list[str]) -> Transaction | None:
    """Build a transaction from decoded CSV fields.

    Returns ``None`` for rows with fewer than five fields.
    """
    if len(fields) < len(TRANSACTION_HEADER):
        return None
    return Transaction(
        transaction_id=fields[0],
        account_number=fields[1],
        transaction_type=_coerce_enum(TransactionType, fields[2]),
        amount=parse_decimal(fields[3]),
        timestamp=fields[4],
    )
