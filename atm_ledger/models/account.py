"""Account model."""

from dataclasses import dataclass
from decimal import Decimal

from atm_ledger.models.enums import AccountType


@dataclass
class Account:
    """ATM bank account.

    ``balance`` is only changed by deposits and withdrawals and never goes
    below zero. ``pin_hash`` holds the SHA-256 hex digest of the PIN, never
    the PIN itself.

    ``account_type`` is normally an ``AccountType``; values read from disk
    that are not a known type are kept as plain strings.
    """

    account_number: str  # ACC1001, ACC1002, ...
    holder_name: str
    account_type: AccountType | str
    balance: Decimal
    pin_hash: str
    locked: bool = False
