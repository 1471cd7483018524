from fastapi import Request

from stockroom.domain import Stockroom


def get_stockroom(request: Request) -> Stockroom:
    """The ``Stockroom`` attached to the running application."""
    return request.app.state.stockroom
