"""Item records and the store that manages them.

Items are looked up by ``name``. Names are not required to be unique:
``update`` and ``get`` act on the first match in stored order while
``delete`` removes every match.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping

import structlog

from stockroom.exceptions import NotFound, PersistenceError, ValidationError
from stockroom.persistence import ITEMS, Persistence
from stockroom.utils.quantity import parse_quantity

logger = structlog.get_logger(__name__)

UPDATABLE_FIELDS = ("name", "amount")


@dataclass(frozen=True)
class Item:
    id: int
    name: str
    amount: int

    def to_record(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "amount": self.amount}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Item":
        try:
            item = cls(id=record["id"], name=record["name"], amount=record["amount"])
        except KeyError as exc:
            raise PersistenceError(
                f"Malformed item record: missing {exc.args[0]}",
                details={"collection": ITEMS, "record": dict(record)},
            ) from exc
        for field in ("id", "amount"):
            value = getattr(item, field)
            if not isinstance(value, int) or isinstance(value, bool):
                raise PersistenceError(
                    f"Malformed item record: {field} is not an integer",
                    details={"collection": ITEMS, "record": dict(record)},
                )
        return item


def find_first(items: list[Item], name: str) -> int | None:
    """Index of the first item called ``name``, or None."""
    for index, item in enumerate(items):
        if item.name == name:
            return index
    return None


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Item name must be a non-empty string", details={"name": name})
    return name


def _validate_amount(amount: Any) -> int:
    parsed = parse_quantity(amount)
    if parsed is None or parsed < 0:
        raise ValidationError("Item amount must be a non-negative integer", details={"amount": amount})
    return parsed


class ItemStore:
    """CRUD over the ``items`` collection.

    Holds no item state between calls: every operation reads the current
    snapshot from ``persistence`` and mutating operations write it back
    while holding the collection lock.
    """

    def __init__(self, persistence: Persistence, clock: Callable[[], float] = time.time):
        self.persistence = persistence
        self._clock = clock

    def list(self) -> list[Item]:
        return [Item.from_record(record) for record in self.persistence.load(ITEMS)]

    def get(self, name: str) -> Item:
        items = self.list()
        index = find_first(items, name)
        if index is None:
            raise NotFound("Item not found", details={"name": name})
        return items[index]

    def create(self, name: str, amount: int) -> Item:
        name = _validate_name(name)
        amount = _validate_amount(amount)

        with self.persistence.lock(ITEMS):
            items = self.list()
            item = Item(id=self._next_id(items), name=name, amount=amount)
            items.append(item)
            self.save_all(items)

        logger.info("Item created", item_id=item.id, name=item.name, amount=item.amount)
        return item

    def update(self, name: str, fields: Mapping[str, Any]) -> Item:
        """Merge ``fields`` over the first item called ``name``.

        ``id`` is immutable and silently ignored. Fields that are not
        supplied keep their current values.
        """
        changes = {key: value for key, value in fields.items() if key != "id"}
        unknown = sorted(set(changes) - set(UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown item fields: {', '.join(unknown)}", details={"fields": unknown})
        if "name" in changes:
            changes["name"] = _validate_name(changes["name"])
        if "amount" in changes:
            changes["amount"] = _validate_amount(changes["amount"])

        with self.persistence.lock(ITEMS):
            items = self.list()
            index = find_first(items, name)
            if index is None:
                raise NotFound("Item not found", details={"name": name})
            items[index] = replace(items[index], **changes)
            self.save_all(items)

        logger.info("Item updated", item_id=items[index].id, name=name, changes=sorted(changes))
        return items[index]

    def delete(self, name: str) -> int:
        """Remove every item called ``name``; returns how many were removed."""
        with self.persistence.lock(ITEMS):
            items = self.list()
            kept = [item for item in items if item.name != name]
            removed = len(items) - len(kept)
            if removed:
                self.save_all(kept)

        logger.info("Items deleted", name=name, removed=removed)
        return removed

    def save_all(self, items: list[Item]) -> None:
        """Persist ``items`` as the whole collection. Callers hold the items lock."""
        self.persistence.save(ITEMS, [item.to_record() for item in items])

    def _next_id(self, items: list[Item]) -> int:
        candidate = int(self._clock() * 1000)
        highest = max((item.id for item in items), default=0)
        return candidate if candidate > highest else highest + 1
