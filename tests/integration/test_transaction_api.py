"""Integration tests for the /transactions endpoints."""

import pytest


@pytest.fixture()
def ledger(client):
    client.post("/items", json={"name": "Widget", "amount": 100})
    for person, date in (("Ann", "2024-01-10"), ("Ben", "2024-03-01"), ("Cat", ""), ("Dan", "2024-03-01")):
        response = client.post(
            "/take-item",
            json={"itemName": "Widget", "amount": 1, "personName": person, "date": date},
        )
        assert response.status_code == 200


class TestListTransactionsEndpoint:
    def test_sorted_by_date_descending(self, client, ledger):
        response = client.get("/transactions")

        assert response.status_code == 200
        assert [t["personName"] for t in response.json()] == ["Ben", "Dan", "Ann", "Cat"]

    def test_stored_order(self, client, ledger):
        response = client.get("/transactions", params={"order": "stored"})
        assert [t["personName"] for t in response.json()] == ["Ann", "Ben", "Cat", "Dan"]

    def test_unknown_order_is_bad_request(self, client, ledger):
        assert client.get("/transactions", params={"order": "size"}).status_code == 400


class TestCorrectTransactionEndpoints:
    def test_update_by_stored_index(self, client, ledger):
        response = client.put("/transactions/2", json={"personName": "Cy", "date": "2024-12-24"})

        assert response.status_code == 200
        assert response.json() == {"personName": "Cy", "itemName": "Widget", "amount": 1, "date": "2024-12-24"}
        assert client.get("/transactions").json()[0]["personName"] == "Cy"

    def test_update_out_of_bounds(self, client, ledger):
        response = client.put("/transactions/4", json={"amount": 2})
        assert response.status_code == 404
        assert response.json() == {"error": "Transaction not found"}

    def test_update_rejects_non_positive_amount(self, client, ledger):
        assert client.put("/transactions/0", json={"amount": 0}).status_code == 400

    def test_delete_by_stored_index(self, client, ledger):
        response = client.delete("/transactions/0")

        assert response.status_code == 204
        stored = client.get("/transactions", params={"order": "stored"}).json()
        assert [t["personName"] for t in stored] == ["Ben", "Cat", "Dan"]

    @pytest.mark.parametrize("index", [-1, 4])
    def test_delete_out_of_bounds(self, client, ledger, index):
        response = client.delete(f"/transactions/{index}")
        assert response.status_code == 404

    def test_correcting_ledger_leaves_stock_alone(self, client, ledger):
        client.delete("/transactions/0")
        assert client.get("/items").json()[0]["amount"] == 96
