"""Stockroom Load Testing: Locust entry point.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py --host http://localhost:3000

    # Take-item contention only:
    locust -f loadtests/locustfile.py TakeContentionUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py TakeContentionUser --headless \
           -u 50 -r 5 -t 120s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.data_generators import HOT_ITEM_NAME, HOT_ITEM_STOCK
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.inventory import InventoryUser  # noqa: F401
from loadtests.scenarios.stress import SpikeUser, TakeContentionUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 500:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Check that the hot item's stock and its ledger entries agree."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    try:
        items = requests.get(f"{environment.host}/items", timeout=5).json()
        ledger = requests.get(f"{environment.host}/transactions", timeout=5).json()
    except (requests.RequestException, ValueError) as e:
        print(f"[LOADTEST] Could not fetch final state: {e}\n")
        return

    hot = [item for item in items if item["name"] == HOT_ITEM_NAME]
    if not hot:
        print("[LOADTEST] Hot item not present; skipping consistency check\n")
        return

    taken = HOT_ITEM_STOCK - hot[0]["amount"]
    recorded = sum(t["amount"] for t in ledger if t["itemName"] == HOT_ITEM_NAME)
    status = "OK" if taken == recorded else "MISMATCH"
    print(f"[LOADTEST] Hot item: taken={taken} ledger={recorded} [{status}]\n")
