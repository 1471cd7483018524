"""Item lifecycle load test scenario.

A SequentialTaskSet journey: create an item, take from it until it runs
out, correct the newest ledger entry, then delete the item.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import correction_data, item_data, take_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ItemState


class ItemLifecycleJourney(SequentialTaskSet):
    """Create Item -> Take (x N) -> Verify Stock -> Correct Ledger -> Delete."""

    def on_start(self):
        self.state = ItemState()

    @task
    def create_item(self):
        payload = item_data(amount=30)
        with self.client.post("/items", json=payload, catch_response=True, name="POST /items") as resp:
            if resp.status_code == 201:
                self.state.item_name = payload["name"]
                self.state.expected_amount = payload["amount"]
            else:
                resp.failure(f"Create item failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def take_until_empty(self):
        while self.state.expected_amount > 0:
            payload = take_data(self.state.item_name, amount=min(5, self.state.expected_amount))
            with self.client.post("/take-item", json=payload, catch_response=True, name="POST /take-item") as resp:
                if resp.status_code != 200:
                    resp.failure(f"Take failed: {resp.status_code}: {extract_error_detail(resp)}")
                    self.interrupt()
                self.state.expected_amount -= payload["amount"]
                self.state.takes += 1
                if resp.json()["remaining"] != self.state.expected_amount:
                    resp.failure(f"Remaining {resp.json()['remaining']} != expected {self.state.expected_amount}")

    @task
    def verify_out_of_stock(self):
        payload = take_data(self.state.item_name, amount=1)
        with self.client.post(
            "/take-item", json=payload, catch_response=True, name="POST /take-item (empty)"
        ) as resp:
            if resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Expected 400 on empty item, got {resp.status_code}")

    @task
    def correct_ledger(self):
        with self.client.get(
            "/transactions", params={"order": "stored"}, catch_response=True, name="GET /transactions?order=stored"
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List ledger failed: {resp.status_code}: {extract_error_detail(resp)}")
                return
            positions = [i for i, t in enumerate(resp.json()) if t["itemName"] == self.state.item_name]
        if positions:
            self.client.put(
                f"/transactions/{positions[-1]}",
                json=correction_data(),
                name="PUT /transactions/{index}",
            )

    @task
    def delete_item(self):
        self.client.delete(f"/items/{self.state.item_name}", name="DELETE /items/{name}")

    @task
    def done(self):
        self.interrupt()


class InventoryUser(HttpUser):
    wait_time = between(0.5, 2)
    tasks = [ItemLifecycleJourney]
