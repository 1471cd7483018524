"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; no cross-user sharing.
"""

from dataclasses import dataclass


@dataclass
class ItemState:
    """Tracks state for a single simulated item lifecycle."""

    item_name: str | None = None
    expected_amount: int = 0
    takes: int = 0
