"""Pydantic request/response schemas for the Stockroom API.

These are the external contracts. Field names on the wire are camelCase
(``personName``, ``itemName``) to stay compatible with existing clients.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from stockroom.item import Item
from stockroom.ledger import Transaction
from stockroom.take import TakeReceipt


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------
class CreateItemRequest(BaseModel):
    name: str = Field(min_length=1)
    amount: int = Field(ge=0)


class UpdateItemRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Accepted so clients can echo a whole item back; never applied.
    id: int | None = None
    name: str | None = Field(default=None, min_length=1)
    amount: int | None = Field(default=None, ge=0)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})


class ItemResponse(BaseModel):
    id: int
    name: str
    amount: int

    @classmethod
    def from_item(cls, item: Item) -> "ItemResponse":
        return cls(id=item.id, name=item.name, amount=item.amount)


# ---------------------------------------------------------------------------
# Take item
# ---------------------------------------------------------------------------
class TakeItemRequest(_CamelModel):
    # Untyped: the take processor validates every field, in its own order
    # and with its own error messages.
    item_name: Any = Field(default=None, alias="itemName")
    amount: Any = None
    person_name: Any = Field(default=None, alias="personName")
    date: Any = None


class TakeItemResponse(BaseModel):
    message: str
    remaining: int

    @classmethod
    def from_receipt(cls, receipt: TakeReceipt) -> "TakeItemResponse":
        return cls(message=receipt.message, remaining=receipt.remaining)


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------
class UpdateTransactionRequest(_CamelModel):
    person_name: str | None = Field(default=None, alias="personName")
    item_name: str | None = Field(default=None, alias="itemName", min_length=1)
    amount: int | None = Field(default=None, ge=1)
    date: str | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class TransactionResponse(_CamelModel):
    person_name: str = Field(alias="personName")
    item_name: str = Field(alias="itemName")
    amount: int
    date: str

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionResponse":
        return cls(
            person_name=transaction.person_name,
            item_name=transaction.item_name,
            amount=transaction.amount,
            date=transaction.date,
        )


class ErrorResponse(BaseModel):
    error: str
