"""CSV persistence for the ledger."""

from atm_ledger.persistence.csv_codec import decode_record, encode_field, encode_record
from atm_ledger.persistence.repository import CsvLedgerRepository

__all__ = ["CsvLedgerRepository", "decode_record", "encode_field", "encode_record"]
