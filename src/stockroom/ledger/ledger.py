"""Append-only ledger of take-events, correctable by position.

Positions (indices) always refer to the stored order returned by
``entries()``, never to the date-sorted view returned by ``list()``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

import structlog

from stockroom.exceptions import NotFound, ValidationError
from stockroom.ledger.transaction import DEFAULT_PERSON, Transaction
from stockroom.persistence import TRANSACTIONS, Persistence
from stockroom.utils.quantity import parse_quantity

logger = structlog.get_logger(__name__)

UPDATABLE_FIELDS = ("person_name", "item_name", "amount", "date")


def sort_by_date(transactions: list[Transaction]) -> list[Transaction]:
    """Newest first; undated entries last. Equal dates keep stored order."""
    dated = [t for t in transactions if t.parsed_date is not None]
    undated = [t for t in transactions if t.parsed_date is None]
    # list.sort is stable with reverse=True as well
    dated.sort(key=lambda t: t.parsed_date, reverse=True)
    return dated + undated


def _clean_changes(fields: Mapping[str, Any]) -> dict[str, Any]:
    unknown = sorted(set(fields) - set(UPDATABLE_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown transaction fields: {', '.join(unknown)}", details={"fields": unknown})

    changes = dict(fields)
    if "amount" in changes:
        amount = parse_quantity(changes["amount"])
        if amount is None or amount <= 0:
            raise ValidationError("Invalid amount", details={"amount": changes["amount"]})
        changes["amount"] = amount
    if "item_name" in changes:
        item_name = changes["item_name"]
        if not isinstance(item_name, str) or not item_name.strip():
            raise ValidationError("Item name must be a non-empty string", details={"item_name": item_name})
    if "person_name" in changes:
        person_name = changes["person_name"]
        if person_name is not None and not isinstance(person_name, str):
            raise ValidationError("Person name must be a string", details={"person_name": person_name})
        changes["person_name"] = person_name or DEFAULT_PERSON
    if "date" in changes:
        date = changes["date"]
        if date is not None and not isinstance(date, str):
            raise ValidationError("Date must be a string", details={"date": date})
        changes["date"] = date or ""
    return changes


class TransactionLedger:
    def __init__(self, persistence: Persistence):
        self.persistence = persistence

    def entries(self) -> list[Transaction]:
        """All transactions in stored order."""
        return [Transaction.from_record(record) for record in self.persistence.load(TRANSACTIONS)]

    def list(self) -> list[Transaction]:
        """All transactions, newest ``date`` first."""
        return sort_by_date(self.entries())

    def append(self, transaction: Transaction) -> None:
        with self.persistence.lock(TRANSACTIONS):
            transactions = self.entries()
            transactions.append(transaction)
            self._save(transactions)

        logger.info(
            "Transaction recorded",
            item_name=transaction.item_name,
            amount=transaction.amount,
            person_name=transaction.person_name,
        )

    def update(self, index: int, fields: Mapping[str, Any]) -> Transaction:
        changes = _clean_changes(fields)

        with self.persistence.lock(TRANSACTIONS):
            transactions = self.entries()
            self._check_index(index, transactions)
            transactions[index] = replace(transactions[index], **changes)
            self._save(transactions)

        logger.info("Transaction corrected", index=index, changes=sorted(changes))
        return transactions[index]

    def delete(self, index: int) -> Transaction:
        with self.persistence.lock(TRANSACTIONS):
            transactions = self.entries()
            self._check_index(index, transactions)
            removed = transactions.pop(index)
            self._save(transactions)

        logger.info("Transaction removed", index=index, item_name=removed.item_name)
        return removed

    def _save(self, transactions: list[Transaction]) -> None:
        self.persistence.save(TRANSACTIONS, [t.to_record() for t in transactions])

    @staticmethod
    def _check_index(index: int, transactions: list[Transaction]) -> None:
        if not 0 <= index < len(transactions):
            raise NotFound("Transaction not found", details={"index": index, "length": len(transactions)})
