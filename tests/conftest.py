"""Pytest configuration and fixtures."""

from datetime import datetime
from pathlib import Path

import pytest

from atm_ledger.persistence import CsvLedgerRepository
from atm_ledger.services import AccountService
from atm_ledger.store import LedgerStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed wall-clock time for transaction timestamps."""
    return datetime(2024, 5, 17, 9, 30, 15)


@pytest.fixture
def store() -> LedgerStore:
    """Create a fresh, empty store for each test."""
    return LedgerStore()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory for ledger files."""
    return tmp_path / "ledger"


@pytest.fixture
def repository(data_dir: Path) -> CsvLedgerRepository:
    """Repository writing into a temporary directory."""
    return CsvLedgerRepository(data_dir)


@pytest.fixture
def service(store: LedgerStore, fixed_now: datetime) -> AccountService:
    """In-memory service with a fixed clock."""
    return AccountService(store, clock=lambda: fixed_now)


@pytest.fixture
def persistent_service(repository: CsvLedgerRepository, fixed_now: datetime) -> AccountService:
    """Service loaded from and saving to the temporary repository."""
    return AccountService(repository.load_all(), repository, clock=lambda: fixed_now)
