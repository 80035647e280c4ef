"""Populate a ledger with realistic-looking demo accounts."""

import logging
import random
from decimal import Decimal

from atm_ledger.generators.base import BaseGenerator
from atm_ledger.models import Account, AccountType
from atm_ledger.services.account_service import AccountService

logger = logging.getLogger(__name__)


class DemoAccountGenerator(BaseGenerator):
    """Register demo accounts and run activity through the account service.

    Going through the service rather than building records directly means
    generated data obeys the same rules as real use: balances never go
    negative and every ID comes from the store's counters.
    """

    ACCOUNT_TYPES = list(AccountType)
    ACCOUNT_TYPE_WEIGHTS = [0.6, 0.4]

    OPENING_DEPOSIT_RANGE = (100, 5000)
    DEPOSIT_RANGE = (20, 1500)
    WITHDRAW_SHARE = 0.45

    def random_pin(self) -> str:
        """Return a random four-digit PIN."""
        return f"{random.randint(0, 9999):04d}"

    def random_amount(self, low: float, high: float) -> Decimal:
        """Return a random two-place amount in ``[low, high]``."""
        return Decimal(str(round(random.uniform(low, high), 2))).quantize(Decimal("0.01"))

    def populate(
        self,
        service: AccountService,
        num_accounts: int = 10,
        transactions_per_account: int = 5,
    ) -> list[tuple[Account, str]]:
        """Create accounts with an opening deposit and random activity.

        Parameters
        ----------
        service : AccountService
            Service to register and transact through.
        num_accounts : int
            Number of accounts to open.
        transactions_per_account : int
            Deposits/withdrawals after the opening deposit.

        Returns
        -------
        list[tuple[Account, str]]
            Each created account with its plaintext PIN.
        """
        created: list[tuple[Account, str]] = []
        for _ in range(num_accounts):
            pin = self.random_pin()
            account_type = random.choices(
                self.ACCOUNT_TYPES, weights=self.ACCOUNT_TYPE_WEIGHTS, k=1
            )[0]
            account = service.register(self.fake.name(), account_type, pin, pin)
            service.deposit(account, self.random_amount(*self.OPENING_DEPOSIT_RANGE))

            for _ in range(transactions_per_account):
                if account.balance >= Decimal("1.00") and random.random() < self.WITHDRAW_SHARE:
                    ceiling = float(account.balance)
                    service.withdraw(account, self.random_amount(1, ceiling))
                else:
                    service.deposit(account, self.random_amount(*self.DEPOSIT_RANGE))

            created.append((account, pin))

        logger.info("Generated %d demo accounts", len(created))
        return created
