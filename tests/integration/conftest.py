import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from stockroom.api import item_router, register_exception_handlers, take_router, transaction_router


@pytest.fixture()
def api_app(stockroom):
    app = FastAPI()
    app.state.stockroom = stockroom
    app.include_router(item_router)
    app.include_router(take_router)
    app.include_router(transaction_router)
    register_exception_handlers(app)
    return app


@pytest.fixture()
def client(api_app):
    return TestClient(api_app)
