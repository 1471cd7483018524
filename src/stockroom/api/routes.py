"""FastAPI routes for items, take-item and the transaction ledger.

Route functions are plain ``def`` so FastAPI runs them in its worker thread
pool; the stores block on file I/O and collection locks.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Response

from stockroom.api.dependencies import get_stockroom
from stockroom.api.schemas import (
    CreateItemRequest,
    ErrorResponse,
    ItemResponse,
    TakeItemRequest,
    TakeItemResponse,
    TransactionResponse,
    UpdateItemRequest,
    UpdateTransactionRequest,
)
from stockroom.domain import Stockroom
from stockroom.take import TakeRequest

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

# ---------------------------------------------------------------------------
# Item Router
# ---------------------------------------------------------------------------
item_router = APIRouter(prefix="/items", tags=["items"], responses=_ERRORS)


@item_router.get("", response_model=list[ItemResponse])
def list_items(stockroom: Stockroom = Depends(get_stockroom)) -> list[ItemResponse]:
    return [ItemResponse.from_item(item) for item in stockroom.items.list()]


@item_router.post("", status_code=201, response_model=ItemResponse)
def create_item(body: CreateItemRequest, stockroom: Stockroom = Depends(get_stockroom)) -> ItemResponse:
    item = stockroom.items.create(body.name, body.amount)
    return ItemResponse.from_item(item)


@item_router.put("/{name}", response_model=ItemResponse)
def update_item(name: str, body: UpdateItemRequest, stockroom: Stockroom = Depends(get_stockroom)) -> ItemResponse:
    item = stockroom.items.update(name, body.changes())
    return ItemResponse.from_item(item)


@item_router.delete("/{name}", status_code=204)
def delete_item(name: str, stockroom: Stockroom = Depends(get_stockroom)) -> Response:
    stockroom.items.delete(name)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Take Router
# ---------------------------------------------------------------------------
take_router = APIRouter(tags=["take-item"], responses=_ERRORS)


@take_router.post("/take-item", response_model=TakeItemResponse)
def take_item(body: TakeItemRequest, stockroom: Stockroom = Depends(get_stockroom)) -> TakeItemResponse:
    outcome = stockroom.processor.take(
        TakeRequest(
            item_name=body.item_name,
            amount=body.amount,
            person_name=body.person_name,
            date=body.date,
        )
    )
    # Failures carry a StockroomError; the registered handlers render it.
    return TakeItemResponse.from_receipt(outcome.unwrap())


# ---------------------------------------------------------------------------
# Transaction Router
# ---------------------------------------------------------------------------
transaction_router = APIRouter(prefix="/transactions", tags=["transactions"], responses=_ERRORS)


@transaction_router.get("", response_model=list[TransactionResponse])
def list_transactions(
    order: Literal["date", "stored"] = "date",
    stockroom: Stockroom = Depends(get_stockroom),
) -> list[TransactionResponse]:
    """Ledger entries, newest first. ``order=stored`` returns the order indices refer to."""
    transactions = stockroom.ledger.entries() if order == "stored" else stockroom.ledger.list()
    return [TransactionResponse.from_transaction(t) for t in transactions]


@transaction_router.put("/{index}", response_model=TransactionResponse)
def update_transaction(
    index: int,
    body: UpdateTransactionRequest,
    stockroom: Stockroom = Depends(get_stockroom),
) -> TransactionResponse:
    transaction = stockroom.ledger.update(index, body.changes())
    return TransactionResponse.from_transaction(transaction)


@transaction_router.delete("/{index}", status_code=204)
def delete_transaction(index: int, stockroom: Stockroom = Depends(get_stockroom)) -> Response:
    stockroom.ledger.delete(index)
    return Response(status_code=204)
