"""Domain models for the ATM ledger."""

from atm_ledger.models.account import Account
from atm_ledger.models.enums import AccountType, TransactionType
from atm_ledger.models.transaction import TIMESTAMP_FORMAT, Transaction

__all__ = ["Account", "AccountType", "TIMESTAMP_FORMAT", "Transaction", "TransactionType"]
