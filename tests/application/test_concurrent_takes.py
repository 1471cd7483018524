"""Concurrent take-item calls must never oversell."""

import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from stockroom.domain import build_stockroom
from stockroom.exceptions import InsufficientStock
from stockroom.ledger import Transaction
from stockroom.persistence import JsonFilePersistence, MemoryPersistence
from stockroom.take import TakeRequest


@pytest.fixture(params=["memory", "json"])
def shared_stockroom(request, tmp_path):
    if request.param == "memory":
        persistence = MemoryPersistence(lock_timeout=30.0)
    else:
        persistence = JsonFilePersistence(tmp_path / "data", lock_timeout=30.0)
    return build_stockroom(persistence=persistence)


def _run_concurrently(stockroom, amounts):
    def take(n, amount):
        return stockroom.processor.take(TakeRequest(item_name="Widget", amount=amount, person_name=f"worker-{n}"))

    with ThreadPoolExecutor(max_workers=16) as pool:
        futures = [pool.submit(take, n, amount) for n, amount in enumerate(amounts)]
        return [future.result() for future in futures]


@pytest.mark.slow
class TestConcurrentTakes:
    def test_unit_takes_never_exceed_stock(self, shared_stockroom):
        shared_stockroom.items.create("Widget", 10)

        outcomes = _run_concurrently(shared_stockroom, [1] * 40)

        succeeded = [o for o in outcomes if o.ok]
        assert len(succeeded) == 10
        assert all(isinstance(o.error, InsufficientStock) for o in outcomes if not o.ok)
        assert shared_stockroom.items.get("Widget").amount == 0
        assert len(shared_stockroom.ledger.entries()) == 10

    def test_mixed_takes_balance_with_ledger(self, shared_stockroom):
        shared_stockroom.items.create("Widget", 50)
        amounts = [random.Random(seed).randint(1, 7) for seed in range(60)]

        outcomes = _run_concurrently(shared_stockroom, amounts)

        deducted = sum(o.value.transaction.amount for o in outcomes if o.ok)
        remaining = shared_stockroom.items.get("Widget").amount
        assert deducted <= 50
        assert remaining == 50 - deducted
        assert remaining >= 0
        assert sum(t.amount for t in shared_stockroom.ledger.entries()) == deducted

    def test_remaining_values_are_unique_and_decreasing(self, shared_stockroom):
        shared_stockroom.items.create("Widget", 20)

        outcomes = _run_concurrently(shared_stockroom, [1] * 20)

        remaining = sorted((o.value.remaining for o in outcomes), reverse=True)
        assert remaining == list(range(19, -1, -1))


@pytest.mark.slow
class TestTakesAlongsideOtherWriters:
    """Takes interleaved with plain item and ledger writes on the file backend."""

    @pytest.fixture()
    def stockroom(self, tmp_path):
        return build_stockroom(persistence=JsonFilePersistence(tmp_path / "data", lock_timeout=30.0))

    def test_creates_do_not_lose_deductions(self, stockroom):
        stockroom.items.create("Widget", 100)

        def take(n):
            return stockroom.processor.take(TakeRequest(item_name="Widget", amount=1, person_name=f"worker-{n}"))

        def create(n):
            return stockroom.items.create(f"Part {n}", n)

        with ThreadPoolExecutor(max_workers=16) as pool:
            futures = [pool.submit(take, n) for n in range(100)]
            futures += [pool.submit(create, n) for n in range(100)]
            results = [future.result() for future in futures]

        assert all(outcome.ok for outcome in results[:100])
        assert stockroom.items.get("Widget").amount == 0
        assert len(stockroom.items.list()) == 101
        assert len({item.id for item in stockroom.items.list()}) == 101
        assert len(stockroom.ledger.entries()) == 100

    def test_updates_and_ledger_corrections_do_not_lose_deductions(self, stockroom):
        stockroom.items.create("Widget", 60)
        stockroom.items.create("Gadget", 0)
        stockroom.ledger.append(Transaction(item_name="Gadget", amount=1, person_name="Seed", date="2024-01-01"))

        def take(n):
            return stockroom.processor.take(TakeRequest(item_name="Widget", amount=1, person_name=f"worker-{n}"))

        def restock(n):
            return stockroom.items.update("Gadget", {"amount": n})

        def correct(n):
            return stockroom.ledger.update(0, {"person_name": f"auditor-{n}"})

        with ThreadPoolExecutor(max_workers=16) as pool:
            futures = [pool.submit(take, n) for n in range(60)]
            futures += [pool.submit(restock, n) for n in range(1, 31)]
            futures += [pool.submit(correct, n) for n in range(30)]
            results = [future.result() for future in futures]

        assert all(outcome.ok for outcome in results[:60])
        assert stockroom.items.get("Widget").amount == 0
        assert 1 <= stockroom.items.get("Gadget").amount <= 30

        entries = stockroom.ledger.entries()
        assert len(entries) == 61
        assert entries[0].item_name == "Gadget"
        assert entries[0].person_name.startswith("auditor-")
        assert sum(t.amount for t in entries[1:]) == 60
