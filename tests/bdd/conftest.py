"""Shared BDD fixtures and step definitions for the inventory API."""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import given, parsers, then, when

from app import create_app


@pytest.fixture()
def client(stockroom):
    return TestClient(create_app(stockroom))


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty stockroom")
def _(client):
    assert client.get("/items").json() == []
    assert client.get("/transactions").json() == []


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.parse('an item "{name}" is created with amount {amount:d}'), target_fixture="response")
def _(client, name, amount):
    return client.post("/items", json={"name": name, "amount": amount})


@when(parsers.parse('"{person}" takes {amount:d} of "{name}"'), target_fixture="response")
def _(client, person, amount, name):
    return client.post("/take-item", json={"personName": person, "itemName": name, "amount": amount})


@when(parsers.parse('someone takes {amount:d} of "{name}"'), target_fixture="response")
def _(client, amount, name):
    return client.post("/take-item", json={"itemName": name, "amount": amount})


@when(parsers.parse('the item "{name}" is deleted'), target_fixture="response")
def _(client, name):
    return client.delete(f"/items/{name}")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse("the response status is {status:d}"))
def _(response, status):
    assert response.status_code == status


@then(parsers.parse('the created item is "{name}" with amount {amount:d}'))
def _(response, name, amount):
    data = response.json()
    assert data["name"] == name
    assert data["amount"] == amount
    assert "id" in data


@then(parsers.parse('the response message is "{message}"'))
def _(response, message):
    assert response.json()["message"] == message


@then(parsers.parse('the response message says "{name}" is out of stock'))
def _(response, name):
    assert f"{name} is now out of stock" in response.json()["message"]


@then(parsers.parse('the response error is "{error}"'))
def _(response, error):
    assert response.json() == {"error": error}


@then(parsers.parse("the remaining stock is {remaining:d}"))
def _(response, remaining):
    assert response.json()["remaining"] == remaining


@then(parsers.parse('the stock of "{name}" is {amount:d}'))
def _(client, name, amount):
    [item] = [item for item in client.get("/items").json() if item["name"] == name]
    assert item["amount"] == amount


@then(parsers.parse('the ledger holds {count:d} entry for {amount:d} "{name}" taken by "{person}"'))
def _(client, count, amount, name, person):
    entries = client.get("/transactions").json()
    assert len(entries) == count
    assert entries[0]["itemName"] == name
    assert entries[0]["amount"] == amount
    assert entries[0]["personName"] == person


@then(parsers.parse('the item list does not include "{name}"'))
def _(client, name):
    assert name not in [item["name"] for item in client.get("/items").json()]


@then("the item list is empty")
def _(client):
    assert client.get("/items").json() == []
