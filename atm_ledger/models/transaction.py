"""Transaction model."""

from dataclasses import dataclass
from decimal import Decimal

from atm_ledger.models.enums import TransactionType

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Transaction:
    """Ledger entry recorded against one account. Never changed once created."""

    transaction_id: str  # TX2, TX3, ...
    account_number: str
    transaction_type: TransactionType | str
    amount: Decimal  # zero for PIN changes
    timestamp: str  # YYYY-MM-DD HH:MM:SS, local time
