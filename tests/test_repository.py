"""Tests for CsvLedgerRepository."""

from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from atm_ledger.exceptions import PersistenceError
from atm_ledger.models import Account, AccountType, Transaction, TransactionType
from atm_ledger.persistence import CsvLedgerRepository
from atm_ledger.security import digest
from atm_ledger.store import LedgerStore

ACCOUNTS_HEADER = "accNo,holder,accType,balance,pinHash,locked\n"
TRANSACTIONS_HEADER = "txId,accNo,type,amount,time\n"


def write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def populated_store() -> LedgerStore:
    store = LedgerStore()
    store.insert_account(
        Account("ACC1001", "Alice", AccountType.SAVINGS, Decimal("300.00"), digest("1234"))
    )
    store.insert_account(
        Account("ACC1002", 'Smith, "Bobby"', AccountType.CHECKING, Decimal("0.00"), digest("0000"), True)
    )
    store.append_transaction(
        Transaction("TX2", "ACC1001", TransactionType.DEPOSIT, Decimal("500.00"), "2024-05-17 09:30:15")
    )
    store.append_transaction(
        Transaction("TX3", "ACC1001", TransactionType.WITHDRAW, Decimal("200.00"), "2024-05-17 09:31:00")
    )
    return store


class TestLoadMissingFiles:
    """Loading when nothing is on disk."""

    def test_empty_store(self, repository: CsvLedgerRepository) -> None:
        store = repository.load_all()

        assert store.accounts == {}
        assert store.transactions == []

    def test_counters_start_past_base(self, repository: CsvLedgerRepository) -> None:
        store = repository.load_all()

        assert store.next_account_number() == "ACC1001"
        assert store.next_transaction_id() == "TX2"

    def test_load_does_not_create_files(self, repository: CsvLedgerRepository) -> None:
        repository.load_all()
        assert not repository.accounts_path.exists()
        assert not repository.transactions_path.exists()


class TestSave:
    """Saving rewrites both files."""

    def test_accounts_file_contents(
        self, repository: CsvLedgerRepository, populated_store: LedgerStore
    ) -> None:
        repository.save_accounts(populated_store)

        text = repository.accounts_path.read_text(encoding="utf-8")
        assert text == (
            ACCOUNTS_HEADER
            + f"ACC1001,Alice,Savings,300.00,{digest('1234')},0\n"
            + f'ACC1002,"Smith, ""Bobby""",Checking,0.00,{digest("0000")},1\n'
        )

    def test_transactions_file_contents(
        self, repository: CsvLedgerRepository, populated_store: LedgerStore
    ) -> None:
        repository.save_transactions(populated_store)

        text = repository.transactions_path.read_text(encoding="utf-8")
        assert text == (
            TRANSACTIONS_HEADER
            + "TX2,ACC1001,Deposit,500.00,2024-05-17 09:30:15\n"
            + "TX3,ACC1001,Withdraw,200.00,2024-05-17 09:31:00\n"
        )

    def test_save_accounts_leaves_transactions_alone(
        self, repository: CsvLedgerRepository, populated_store: LedgerStore
    ) -> None:
        repository.save_accounts(populated_store)
        assert not repository.transactions_path.exists()

    def test_save_rewrites_not_appends(
        self, repository: CsvLedgerRepository, populated_store: LedgerStore
    ) -> None:
        repository.save_all(populated_store)
        repository.save_all(populated_store)

        lines = repository.accounts_path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 3

    def test_save_creates_data_dir(self, tmp_path: Path, populated_store: LedgerStore) -> None:
        repository = CsvLedgerRepository(tmp_path / "a" / "b")
        repository.save_all(populated_store)
        assert repository.accounts_path.exists()

    def test_write_failure_raises(
        self, repository: CsvLedgerRepository, populated_store: LedgerStore
    ) -> None:
        with patch("builtins.open", side_effect=PermissionError("read-only")):
            with pytest.raises(PersistenceError, match="read-only"):
                repository.save_accounts(populated_store)

    def test_empty_store_writes_header_only(self, repository: CsvLedgerRepository) -> None:
        repository.save_all(LedgerStore())
        assert repository.accounts_path.read_text(encoding="utf-8") == ACCOUNTS_HEADER
        assert repository.transactions_path.read_text(encoding="utf-8") == TRANSACTIONS_HEADER


class TestRoundTrip:
    """Save then load."""

    def test_reload_matches(
        self, repository: CsvLedgerRepository, populated_store: LedgerStore
    ) -> None:
        repository.save_all(populated_store)
        loaded = repository.load_all()

        assert loaded.accounts == populated_store.accounts
        assert loaded.transactions == populated_store.transactions
        assert list(loaded.accounts) == ["ACC1001", "ACC1002"]

    def test_counters_seeded_from_loaded_ids(
        self, repository: CsvLedgerRepository, populated_store: LedgerStore
    ) -> None:
        repository.save_all(populated_store)
        loaded = repository.load_all()

        assert loaded.next_account_number() == "ACC1003"
        assert loaded.next_transaction_id() == "TX4"

    def test_newline_in_name_survives(self, repository: CsvLedgerRepository) -> None:
        store = LedgerStore()
        store.insert_account(Account("ACC1001", "Line one\nLine two", AccountType.SAVINGS, Decimal("1.00"), "ab"))
        store.insert_account(Account("ACC1002", "Plain", AccountType.SAVINGS, Decimal("2.00"), "cd"))
        repository.save_accounts(store)

        loaded = repository.load_all()
        assert loaded.accounts["ACC1001"].holder_name == "Line one\nLine two"
        assert loaded.accounts["ACC1002"].holder_name == "Plain"

    def test_carriage_return_in_name_survives(self, repository: CsvLedgerRepository) -> None:
        store = LedgerStore()
        store.insert_account(Account("ACC1001", "Ann\rLee", AccountType.SAVINGS, Decimal("500.00"), "ab"))
        store.insert_account(Account("ACC1002", "Bob", AccountType.CHECKING, Decimal("0.00"), "cd"))
        repository.save_accounts(store)

        loaded = repository.load_all()

        assert list(loaded.accounts) == ["ACC1001", "ACC1002"]
        assert loaded.accounts["ACC1001"].holder_name == "Ann\rLee"
        assert loaded.accounts["ACC1001"].balance == Decimal("500.00")
        assert loaded.next_account_number() == "ACC1003"


class TestLoadRecovery:
    """Best-effort loading of damaged files."""

    def test_short_rows_skipped(self, repository: CsvLedgerRepository) -> None:
        write(
            repository.accounts_path,
            ACCOUNTS_HEADER + "ACC1001,Alice,Savings,10.00,ab,0\nACC1002,Bob,Savings\n\n",
        )
        write(
            repository.transactions_path,
            TRANSACTIONS_HEADER + "TX2,ACC1001,Deposit,10.00,2024-01-01 00:00:00\nTX3,ACC1001\n",
        )

        store = repository.load_all()

        assert list(store.accounts) == ["ACC1001"]
        assert [t.transaction_id for t in store.transactions] == ["TX2"]

    def test_bad_numbers_default_to_zero(self, repository: CsvLedgerRepository) -> None:
        write(repository.accounts_path, ACCOUNTS_HEADER + "ACC1001,Alice,Savings,oops,ab,0\n")
        write(repository.transactions_path, TRANSACTIONS_HEADER + "TX2,ACC1001,Deposit,??,t\n")

        store = repository.load_all()

        assert store.accounts["ACC1001"].balance == Decimal("0")
        assert store.transactions[0].amount == Decimal("0")

    def test_counter_uses_highest_suffix(self, repository: CsvLedgerRepository) -> None:
        write(
            repository.accounts_path,
            ACCOUNTS_HEADER
            + "ACC1007,A,Savings,0,ab,0\nACC1003,B,Savings,0,ab,0\nLEGACY9,C,Savings,0,ab,0\nACCxyz,D,Savings,0,ab,0\n",
        )
        write(repository.transactions_path, TRANSACTIONS_HEADER + "TX40,ACC1007,Deposit,1,t\nTX12,ACC1007,Deposit,1,t\n")

        store = repository.load_all()

        assert len(store.accounts) == 4
        assert store.next_account_number() == "ACC1008"
        assert store.next_transaction_id() == "TX41"

    def test_suffix_below_base_keeps_base(self, repository: CsvLedgerRepository) -> None:
        write(repository.accounts_path, ACCOUNTS_HEADER + "ACC7,A,Savings,0,ab,0\n")

        store = repository.load_all()

        assert store.next_account_number() == "ACC1001"

    def test_crlf_line_endings(self, repository: CsvLedgerRepository) -> None:
        repository.accounts_path.parent.mkdir(parents=True)
        repository.accounts_path.write_bytes(
            b"accNo,holder,accType,balance,pinHash,locked\r\nACC1001,Alice,Savings,5.00,ab,1\r\n"
        )

        account = repository.load_all().accounts["ACC1001"]

        assert account.locked is True
        assert account.pin_hash == "ab"

    def test_unreadable_file_starts_empty(self, repository: CsvLedgerRepository) -> None:
        repository.accounts_path.parent.mkdir(parents=True)
        repository.accounts_path.write_bytes(ACCOUNTS_HEADER.encode() + b"ACC1001,\xff\xfe,Savings,0,ab,0\n")
        write(repository.transactions_path, TRANSACTIONS_HEADER + "TX5,ACC1001,Deposit,1.00,t\n")

        store = repository.load_all()

        assert store.accounts == {}
        assert len(store.transactions) == 1
        assert store.next_account_number() == "ACC1001"
