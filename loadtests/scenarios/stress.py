"""Contention scenarios for the take-item path.

TakeContentionUser hammers one shared "hot" item from every user so that
concurrent takes serialize on the collection locks. SpikeUser adds bursts
of creates and reads alongside. At the end of a run the locustfile checks
that stock taken from the hot item matches its ledger entries.
"""

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import HOT_ITEM_NAME, HOT_ITEM_STOCK, item_data, take_data


def ensure_hot_item(client) -> None:
    resp = client.get("/items", name="GET /items (setup)")
    if any(item["name"] == HOT_ITEM_NAME for item in resp.json()):
        return
    client.post("/items", json={"name": HOT_ITEM_NAME, "amount": HOT_ITEM_STOCK}, name="POST /items (setup)")


class TakeContentionUser(HttpUser):
    """Stress test: every user takes from the same item."""

    wait_time = constant_pacing(0.1)

    def on_start(self):
        ensure_hot_item(self.client)

    @task(10)
    def take_hot_item(self):
        self.client.post("/take-item", json=take_data(HOT_ITEM_NAME), name="[STRESS] POST /take-item")

    @task(1)
    def list_transactions(self):
        self.client.get("/transactions", name="[STRESS] GET /transactions")


class SpikeUser(HttpUser):
    """Bursts of item writes competing with takes for the items lock."""

    wait_time = constant_pacing(0.05)

    @task(3)
    def create_item(self):
        self.client.post("/items", json=item_data(), name="[SPIKE] POST /items")

    @task(1)
    def list_items(self):
        self.client.get("/items", name="[SPIKE] GET /items")
