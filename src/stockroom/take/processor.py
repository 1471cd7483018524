"""Take-item use case.

Taking stock runs as a fixed pipeline of stages:

    validate -> locate -> deduct -> commit

Each stage returns an ``Outcome``; the first ``Failure`` ends the run and is
returned to the caller unchanged. ``locate`` through ``commit`` execute
while both the items and transactions locks are held, so concurrent takes
against the same item are serialized and can never oversell.

``commit`` writes the decremented items first and the ledger entry second.
If the ledger write fails the pre-take items snapshot is written back, so
stock is never reduced without an audit entry.
"""

from dataclasses import dataclass, replace
from typing import Any

import structlog

from stockroom.exceptions import InsufficientStock, NotFound, PersistenceError, ValidationError
from stockroom.item import Item, ItemStore
from stockroom.item.item import find_first
from stockroom.ledger import DEFAULT_PERSON, Transaction, TransactionLedger
from stockroom.persistence import ITEMS, TRANSACTIONS
from stockroom.take.outcome import Failure, Outcome, Success
from stockroom.utils.quantity import is_missing, parse_quantity

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TakeRequest:
    """Raw take-item input, exactly as received from the caller."""

    item_name: Any = None
    amount: Any = None
    person_name: Any = None
    date: Any = None


@dataclass(frozen=True)
class TakeReceipt:
    message: str
    remaining: int
    transaction: Transaction

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "remaining": self.remaining}


@dataclass(frozen=True)
class _Deduction:
    before: list[Item]
    after: list[Item]
    item: Item
    transaction: Transaction


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------
def validate(request: TakeRequest) -> Outcome[Transaction]:
    """Check the request and normalise it into the ledger entry to record."""
    if is_missing(request.item_name) or is_missing(request.amount):
        return Failure(ValidationError("Missing required fields"))

    amount = parse_quantity(request.amount)
    if amount is None or amount <= 0:
        return Failure(ValidationError("Invalid amount", details={"amount": request.amount}))

    if not isinstance(request.item_name, str):
        return Failure(ValidationError("Item name must be a string", details={"item_name": request.item_name}))

    person_name = request.person_name
    if is_missing(person_name):
        person_name = DEFAULT_PERSON
    elif not isinstance(person_name, str):
        return Failure(ValidationError("Person name must be a string", details={"person_name": person_name}))

    date = request.date
    if date is None:
        date = ""
    elif not isinstance(date, str):
        return Failure(ValidationError("Date must be a string", details={"date": date}))

    return Success(
        Transaction(
            item_name=request.item_name,
            amount=amount,
            person_name=person_name,
            date=date,
        )
    )


def locate(items: list[Item], item_name: str) -> Outcome[int]:
    index = find_first(items, item_name)
    if index is None:
        return Failure(NotFound("Item not found", details={"item_name": item_name}))
    return Success(index)


def deduct(items: list[Item], index: int, transaction: Transaction) -> Outcome[_Deduction]:
    """Build the post-take snapshot without touching ``items``."""
    item = items[index]
    if item.amount < transaction.amount:
        return Failure(
            InsufficientStock(
                "Insufficient amount",
                details={"item_name": item.name, "available": item.amount, "requested": transaction.amount},
            )
        )

    taken = replace(item, amount=item.amount - transaction.amount)
    after = list(items)
    after[index] = taken
    return Success(_Deduction(before=items, after=after, item=taken, transaction=transaction))


def receipt_for(item: Item, transaction: Transaction) -> TakeReceipt:
    message = f"{transaction.person_name} took {transaction.amount} {item.name}(s)"
    if item.amount == 0:
        message = f"{message}. {item.name} is now out of stock"
    return TakeReceipt(message=message, remaining=item.amount, transaction=transaction)


# ---------------------------------------------------------------------------
# Processor
# ---------------------------------------------------------------------------
class TakeItemProcessor:
    """Composes the item store and the ledger into one logical take operation."""

    def __init__(self, items: ItemStore, ledger: TransactionLedger):
        self.items = items
        self.ledger = ledger
        self.persistence = items.persistence

    def take(self, request: TakeRequest) -> Outcome[TakeReceipt]:
        validated = validate(request)
        if isinstance(validated, Failure):
            return self._rejected(request, validated)
        transaction = validated.value

        try:
            with self.persistence.locked(ITEMS, TRANSACTIONS):
                items = self.items.list()

                located = locate(items, transaction.item_name)
                if isinstance(located, Failure):
                    return self._rejected(request, located)

                deducted = deduct(items, located.value, transaction)
                if isinstance(deducted, Failure):
                    return self._rejected(request, deducted)

                outcome = self._commit(deducted.value)
        except PersistenceError as exc:
            # Lock timeout or unreadable snapshot; nothing has been written.
            logger.error("Take aborted before any write", item_name=transaction.item_name, error=exc.message)
            return Failure(exc)

        if isinstance(outcome, Success):
            logger.info(
                "Item taken",
                item_name=transaction.item_name,
                amount=transaction.amount,
                person_name=transaction.person_name,
                remaining=outcome.value.remaining,
            )
        return outcome

    def _commit(self, deduction: _Deduction) -> Outcome[TakeReceipt]:
        try:
            self.items.save_all(deduction.after)
        except PersistenceError as exc:
            logger.error("Failed to save stock deduction", item_name=deduction.item.name, error=exc.message)
            return Failure(exc)

        try:
            self.ledger.append(deduction.transaction)
        except PersistenceError as exc:
            return Failure(self._compensate(deduction, exc))

        return Success(receipt_for(deduction.item, deduction.transaction))

    def _compensate(self, deduction: _Deduction, cause: PersistenceError) -> PersistenceError:
        """Restore the pre-take items snapshot after a failed ledger write."""
        details = {"item_name": deduction.item.name, "reason": cause.message}
        try:
            self.items.save_all(deduction.before)
        except PersistenceError as exc:
            logger.error(
                "Stock deduction could not be rolled back; ledger entry missing",
                item_name=deduction.item.name,
                amount=deduction.transaction.amount,
                error=exc.message,
            )
            return PersistenceError("Error processing transaction", details={**details, "compensated": False})

        logger.warning(
            "Ledger write failed; stock deduction rolled back",
            item_name=deduction.item.name,
            error=cause.message,
        )
        return PersistenceError("Error processing transaction", details={**details, "compensated": True})

    @staticmethod
    def _rejected(request: TakeRequest, failure: Failure) -> Failure:
        logger.warning(
            "Take rejected",
            item_name=request.item_name,
            amount=request.amount,
            reason=failure.error.message,
        )
        return failure
