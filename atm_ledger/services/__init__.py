"""Account service and session."""

from atm_ledger.services.account_service import AccountService, parse_amount
from atm_ledger.services.session import Session, SessionState

__all__ = ["AccountService", "Session", "SessionState", "parse_amount"]
