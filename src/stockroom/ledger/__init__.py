from stockroom.ledger.ledger import TransactionLedger
from stockroom.ledger.transaction import DEFAULT_PERSON, Transaction

__all__ = ["DEFAULT_PERSON", "Transaction", "TransactionLedger"]
