"""Player inventory and helper functions."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

from bottega.types import CraftedItem, Material

K = TypeVar("K", bound=Enum)


@dataclass
class Inventory:
    """Player holdings. A missing key means zero; zero counts are not stored.

    Attributes:
        raw: Mapping of Material -> quantity.
        crafted: Mapping of CraftedItem -> quantity.
    """

    raw: dict[Material, int] = field(default_factory=dict)
    crafted: dict[CraftedItem, int] = field(default_factory=dict)


class InventoryHelper:
    """Pure functions over the count mappings inside an Inventory."""

    @staticmethod
    def count(slots: dict[K, int], key: K) -> int:
        """Current quantity of *key*, zero when absent."""
        return slots.get(key, 0)

    @staticmethod
    def add(slots: dict[K, int], key: K, amount: int = 1) -> int:
        """Add *amount* of *key*. Returns the amount added."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        if amount == 0:
            return 0
        slots[key] = slots.get(key, 0) + amount
        return amount

    @staticmethod
    def remove(slots: dict[K, int], key: K, amount: int = 1) -> int:
        """Remove up to *amount* of *key*. Returns the amount actually removed."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        if amount == 0 or key not in slots:
            return 0

        current = slots[key]
        actual = min(amount, current)
        remaining = current - actual
        if remaining == 0:
            del slots[key]
        else:
            slots[key] = remaining
        return actual

    @staticmethod
    def has(slots: dict[K, int], key: K, amount: int = 1) -> bool:
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        return slots.get(key, 0) >= amount

    @staticmethod
    def merge(slots: dict[K, int], other: dict[K, int]) -> None:
        """Add every count in *other* into *slots*."""
        for key, amount in other.items():
            InventoryHelper.add(slots, key, amount)


def tally(items: list[K | None]) -> dict[K, int]:
    """Count occurrences of each non-empty entry, ignoring order."""
    result: dict[K, int] = {}
    for item in items:
        if item is not None:
            result[item] = result.get(item, 0) + 1
    return result
