"""In-memory ledger of accounts and transactions."""

from dataclasses import dataclass, field

from atm_ledger.models import Account, Transaction

ACCOUNT_PREFIX = "ACC"
TRANSACTION_PREFIX = "TX"

# Counters start here when nothing has been loaded
ACCOUNT_SEQ_BASE = 1000
TRANSACTION_SEQ_BASE = 1


@dataclass
class LedgerStore:
    """Authoritative in-memory state for one running ATM.

    Accounts are kept in insertion order so that saved files are stable.
    Transactions are append-only. The two counters hold the sequence number
    the next minted ID will use.

    Nothing here validates input; that is the account service's job. The
    mutators are the only place a lock would be needed if the store were
    ever shared between threads.
    """

    accounts: dict[str, Account] = field(default_factory=dict)
    transactions: list[Transaction] = field(default_factory=list)
    next_account_seq: int = ACCOUNT_SEQ_BASE + 1
    next_tx_seq: int = TRANSACTION_SEQ_BASE + 1

    def seed_counters(self, max_account_seq: int, max_tx_seq: int) -> None:
        """Position both counters just past the highest sequence numbers seen."""
        self.next_account_seq = max_account_seq + 1
        self.next_tx_seq = max_tx_seq + 1

    def next_account_number(self) -> str:
        """Mint an account number not already present in the store."""
        while True:
            candidate = f"{ACCOUNT_PREFIX}{self.next_account_seq}"
            self.next_account_seq += 1
            if candidate not in self.accounts:
                return candidate

    def next_transaction_id(self) -> str:
        """Mint the next transaction ID.

        There is no collision check: the counter is seeded past every
        loaded ID, which is enough for files this process wrote itself.
        """
        tx_id = f"{TRANSACTION_PREFIX}{self.next_tx_seq}"
        self.next_tx_seq += 1
        return tx_id

    def insert_account(self, account: Account) -> None:
        """Add or replace an account keyed by its number."""
        self.accounts[account.account_number] = account

    def append_transaction(self, transaction: Transaction) -> None:
        """Append a transaction to the log."""
        self.transactions.append(transaction)

    # Query methods
    def get_account(self, account_number: str) -> Account | None:
        """Look up an account by number."""
        return self.accounts.get(account_number)

    def transactions_for(self, account_number: str) -> list[Transaction]:
        """Get an account's transactions, most recent first."""
        return [t for t in reversed(self.transactions) if t.account_number == account_number]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "accounts": len(self.accounts),
            "transactions": len(self.transactions),
        }
