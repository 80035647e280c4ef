"""CSV file persistence for the ledger store."""

import logging
from pathlib import Path
from typing import Callable, Iterator, TypeVar

from atm_ledger.exceptions import PersistenceError
from atm_ledger.persistence.csv_codec import decode_record, encode_record, has_open_quote
from atm_ledger.persistence.serialization import (
    ACCOUNT_HEADER,
    TRANSACTION_HEADER,
    account_from_row,
    account_to_row,
    transaction_from_row,
    transaction_to_row,
)
from atm_ledger.store.ledger import (
    ACCOUNT_PREFIX,
    ACCOUNT_SEQ_BASE,
    TRANSACTION_PREFIX,
    TRANSACTION_SEQ_BASE,
    LedgerStore,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _sequence_number(identifier: str, prefix: str) -> int | None:
    """Return the numeric suffix of ``identifier``, or None if there isn't one."""
    if not identifier.startswith(prefix):
        return None
    suffix = identifier[len(prefix):]
    if not suffix.isascii() or not suffix.isdigit():
        return None
    return int(suffix)


class CsvLedgerRepository:
    """Mirror a ``LedgerStore`` to ``accounts.csv`` and ``transactions.csv``.

    Every save rewrites the whole file. There is no temp file and no
    rename, so a crash mid-write can leave a truncated file; the last
    completed write wins.
    """

    def __init__(
        self,
        data_dir: str | Path = ".",
        accounts_file: str = "accounts.csv",
        transactions_file: str = "transactions.csv",
    ) -> None:
        """Initialize the repository.

        Parameters
        ----------
        data_dir : str | Path
            Directory holding both files. Created on first save.
        accounts_file : str
            Accounts file name.
        transactions_file : str
            Transactions file name.
        """
        self.data_dir = Path(data_dir)
        self.accounts_path = self.data_dir / accounts_file
        self.transactions_path = self.data_dir / transactions_file

    def load_all(self) -> LedgerStore:
        """Rebuild a ledger store from disk.

        A missing or unreadable file gives an empty collection; rows that
        are too short to parse are skipped.

        Returns
        -------
        LedgerStore
            Populated store with counters positioned past every loaded ID.
        """
        store = LedgerStore()
        max_account_seq = ACCOUNT_SEQ_BASE
        max_tx_seq = TRANSACTION_SEQ_BASE

        for account in self._load(self.accounts_path, account_from_row):
            store.insert_account(account)
            seq = _sequence_number(account.account_number, ACCOUNT_PREFIX)
            if seq is not None:
                max_account_seq = max(max_account_seq, seq)

        for transaction in self._load(self.transactions_path, transaction_from_row):
            store.append_transaction(transaction)
            seq = _sequence_number(transaction.transaction_id, TRANSACTION_PREFIX)
            if seq is not None:
                max_tx_seq = max(max_tx_seq, seq)

        store.seed_counters(max_account_seq, max_tx_seq)
        logger.info(
            "Loaded %d accounts and %d transactions from %s",
            len(store.accounts),
            len(store.transactions),
            self.data_dir,
        )
        return store

    def save_accounts(self, store: LedgerStore) -> None:
        """Rewrite the accounts file from the store."""
        rows = (account_to_row(a) for a in store.accounts.values())
        self._write(self.accounts_path, ACCOUNT_HEADER, rows)
        logger.debug("Saved %d accounts to %s", len(store.accounts), self.accounts_path)

    def save_transactions(self, store: LedgerStore) -> None:
        """Rewrite the transactions file from the store."""
        rows = (transaction_to_row(t) for t in store.transactions)
        self._write(self.transactions_path, TRANSACTION_HEADER, rows)
        logger.debug(
            "Saved %d transactions to %s", len(store.transactions), self.transactions_path
        )

    def save_all(self, store: LedgerStore) -> None:
        """Rewrite both files."""
        self.save_accounts(store)
        self.save_transactions(store)

    def _load(self, path: Path, parse: Callable[[list[str]], T | None]) -> list[T]:
        """Parse every record of ``path`` that ``parse`` accepts."""
        if not path.exists():
            logger.debug("%s does not exist, starting empty", path)
            return []

        items: list[T] = []
        try:
            for record in self._read_records(path):
                item = parse(decode_record(record))
                if item is None:
                    logger.debug("Skipping short record in %s: %r", path.name, record)
                    continue
                items.append(item)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s, starting empty: %s", path, e)
            return []
        return items

    @staticmethod
    def _read_records(path: Path) -> Iterator[str]:
        """Yield logical records after the header, joining quoted newlines."""
        with open(path, "r", encoding="utf-8", newline="\n") as f:
            f.readline()  # header
            buffer = ""
            for line in f:
                buffer += line
                if has_open_quote(buffer):
                    continue
                record = buffer.removesuffix("\n").removesuffix("\r")
                buffer = ""
                if record:
                    yield record
            if buffer:
                # Unterminated quote at end of file
                yield buffer.removesuffix("\n").removesuffix("\r")

    def _write(self, path: Path, header: list[str], rows: Iterator[list[str]]) -> None:
        """Write header and rows to ``path``, replacing its contents."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(encode_record(header) + "\n")
                for row in rows:
                    f.write(encode_record(row) + "\n")
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            raise PersistenceError(f"Failed to write {path}: {e}") from e
