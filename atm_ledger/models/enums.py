"""Enumeration types for ATM ledger entities."""

from enum import Enum


class AccountType(str, Enum):
    SAVINGS = "Savings"
    CHECKING = "Checking"


class TransactionType(str, Enum):
    DEPOSIT = "Deposit"
    WITHDRAW = "Withdraw"
    PIN_CHANGE = "PIN_CHANGE"
