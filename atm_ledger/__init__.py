"""ATM banking simulator: account ledger with CSV persistence."""

from atm_ledger.models import Account, AccountType, Transaction, TransactionType
from atm_ledger.persistence import CsvLedgerRepository
from atm_ledger.services import AccountService, Session
from atm_ledger.store import LedgerStore

__version__ = "0.1.0"

__all__ = [
    "Account",
    "AccountService",
    "AccountType",
    "CsvLedgerRepository",
    "LedgerStore",
    "Session",
    "Transaction",
    "TransactionType",
]
