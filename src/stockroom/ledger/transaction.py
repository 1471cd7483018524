"""Take-event records kept in the ledger."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Mapping

from stockroom.exceptions import PersistenceError
from stockroom.persistence import TRANSACTIONS

DEFAULT_PERSON = "System"


@dataclass(frozen=True)
class Transaction:
    """Stock taken from an item by a named person.

    ``item_name`` is the item's name at the time of the take. It is not
    kept in sync if the item is later renamed or deleted.
    """

    item_name: str
    amount: int
    person_name: str = DEFAULT_PERSON
    date: str = ""

    def to_record(self) -> dict[str, Any]:
        return {
            "personName": self.person_name,
            "itemName": self.item_name,
            "amount": self.amount,
            "date": self.date,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Transaction":
        try:
            return cls(
                item_name=record["itemName"],
                amount=record["amount"],
                person_name=record.get("personName") or DEFAULT_PERSON,
                date=record.get("date") or record.get("timestamp") or "",
            )
        except KeyError as exc:
            raise PersistenceError(
                f"Malformed transaction record: missing {exc.args[0]}",
                details={"collection": TRANSACTIONS, "record": dict(record)},
            ) from exc

    @property
    def parsed_date(self) -> datetime | None:
        """``date`` as an aware datetime, or None when empty or not ISO 8601.

        Naive values are read as UTC.
        """
        text = self.date.strip() if isinstance(self.date, str) else ""
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed
