"""Command-line front-end for the ATM ledger.

Each invocation loads the ledger from the data directory, performs one
operation and exits. Commands that touch an account log in first with
``--account`` and ``--pin``.

Usage::

    atm-ledger register --name "Alice" --type Savings --pin 1234 --confirm-pin 1234
    atm-ledger deposit --account ACC1001 --pin 1234 500.00
    atm-ledger history --account ACC1001 --pin 1234
"""

import argparse
import sys
from pathlib import Path

from atm_ledger.config import AtmConfig
from atm_ledger.exceptions import AtmError
from atm_ledger.generators import DemoAccountGenerator
from atm_ledger.logging import setup_logging
from atm_ledger.models import Account, AccountType, Transaction
from atm_ledger.persistence import CsvLedgerRepository
from atm_ledger.services import AccountService, Session


def _add_credentials(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--account", required=True, help="Account number (e.g. ACC1001)")
    parser.add_argument("--pin", required=True, help="Four-digit PIN")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog="atm-ledger", description="ATM banking simulator")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding accounts.csv and transactions.csv (default: $ATM_DATA_DIR or .)",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: $LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    register = sub.add_parser("register", help="Open a new account")
    register.add_argument("--name", required=True, help="Account holder name")
    register.add_argument(
        "--type",
        dest="account_type",
        default=AccountType.SAVINGS.value,
        choices=[t.value for t in AccountType],
        help="Account type (default: Savings)",
    )
    register.add_argument("--pin", required=True, help="Four-digit PIN")
    register.add_argument("--confirm-pin", required=True, help="Repeat the PIN")

    balance = sub.add_parser("balance", help="Show account balance")
    _add_credentials(balance)

    deposit = sub.add_parser("deposit", help="Deposit money")
    _add_credentials(deposit)
    deposit.add_argument("amount", help="Amount to deposit")

    withdraw = sub.add_parser("withdraw", help="Withdraw money")
    _add_credentials(withdraw)
    withdraw.add_argument("amount", help="Amount to withdraw")

    change_pin = sub.add_parser("change-pin", help="Change the account PIN")
    _add_credentials(change_pin)
    change_pin.add_argument("--new-pin", required=True, help="New four-digit PIN")
    change_pin.add_argument("--confirm-pin", required=True, help="Repeat the new PIN")

    history = sub.add_parser("history", help="List transactions, most recent first")
    _add_credentials(history)

    seed = sub.add_parser("seed", help="Generate demo accounts with random activity")
    seed.add_argument("--accounts", type=int, default=5, help="Number of accounts (default: 5)")
    seed.add_argument(
        "--transactions", type=int, default=5, help="Transactions per account (default: 5)"
    )
    seed.add_argument("--seed", type=int, default=None, help="Random seed")

    return parser


def _format_account(account: Account) -> str:
    account_type = getattr(account.account_type, "value", account.account_type)
    return f"{account.account_number}  {account.holder_name} ({account_type})"


def _format_transaction(tx: Transaction) -> str:
    tx_type = getattr(tx.transaction_type, "value", tx.transaction_type)
    return f"{tx.transaction_id:<8} {tx_type:<10} {tx.amount:>12.2f}  {tx.timestamp}"


def run(args: argparse.Namespace, service: AccountService) -> None:
    """Execute one parsed command against ``service``."""
    session = Session(service)

    if args.command == "register":
        account = session.register(args.name, args.account_type, args.pin, args.confirm_pin)
        print(f"Account created: {account.account_number}")
        print("Keep your PIN secret.")
        return

    if args.command == "seed":
        generator = DemoAccountGenerator(seed=args.seed)
        for account, pin in generator.populate(service, args.accounts, args.transactions):
            print(f"{_format_account(account)}  PIN {pin}  balance {account.balance:.2f}")
        return

    account = session.login(args.account, args.pin)

    if args.command == "balance":
        print(_format_account(account))
        print(f"Balance: {session.balance():.2f}")
    elif args.command == "deposit":
        tx = session.deposit(args.amount)
        print(f"Deposited {tx.amount:.2f}. Balance: {session.balance():.2f}")
    elif args.command == "withdraw":
        tx = session.withdraw(args.amount)
        print(f"Withdrew {tx.amount:.2f}. Balance: {session.balance():.2f}")
    elif args.command == "change-pin":
        session.change_pin(args.pin, args.new_pin, args.confirm_pin)
        print("PIN changed successfully")
    elif args.command == "history":
        transactions = session.history()
        print(_format_account(account))
        if not transactions:
            print("No transactions")
        for tx in transactions:
            print(_format_transaction(tx))

    session.logout()


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``atm-ledger`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = AtmConfig.from_env()
        if args.data_dir is not None:
            config.storage.data_dir = args.data_dir
        setup_logging(args.log_level or config.logging.level, config.logging.format_type)

        repository = CsvLedgerRepository(
            config.storage.data_dir,
            config.storage.accounts_file,
            config.storage.transactions_file,
        )
        service = AccountService.from_repository(repository)
        run(args, service)
    except AtmError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
