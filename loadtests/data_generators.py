"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the Stockroom API request schemas:
``{name, amount}`` for items and ``{personName, itemName, amount, date}``
for take-item.
"""

import random
import uuid

from faker import Faker

fake = Faker()

HOT_ITEM_NAME = "LT-hot-item"
HOT_ITEM_STOCK = 1_000_000


def unique_item_name() -> str:
    """Item names like 'LT-bracket-a1b2c3d4', unique per call."""
    return f"LT-{fake.word()}-{uuid.uuid4().hex[:8]}"


def item_data(amount: int | None = None) -> dict:
    return {
        "name": unique_item_name(),
        "amount": amount if amount is not None else random.randint(20, 200),
    }


def take_data(item_name: str, amount: int | None = None) -> dict:
    """Take-item payload; about one in five omits personName to exercise the default."""
    payload = {
        "itemName": item_name,
        "amount": amount if amount is not None else random.randint(1, 5),
        "date": fake.date_time_this_year().isoformat(timespec="seconds"),
    }
    if random.random() > 0.2:
        payload["personName"] = fake.first_name()
    return payload


def correction_data() -> dict:
    return {"personName": fake.first_name(), "date": fake.date_this_year().isoformat()}
