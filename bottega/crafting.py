"""Workbench and furnace state.

The furnace moves through three states::

    IDLE --mix--> LOADED --start (temperature matches)--> PROCESSING --complete--> IDLE

A temperature mismatch leaves a loaded furnace where it is. A loaded furnace
may be cancelled back to IDLE; a processing one may not.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from bottega.inventory import tally
from bottega.recipe import Recipe
from bottega.types import Material, Temperature

WORKBENCH_SIZE = 4


class FurnaceState(str, Enum):
    IDLE = "idle"
    LOADED = "loaded"
    PROCESSING = "processing"


@dataclass
class Workbench:
    """Fixed-size row of slots, each holding one unit or None."""

    slots: list[Material | None] = field(
        default_factory=lambda: [None] * WORKBENCH_SIZE
    )

    @classmethod
    def of_size(cls, size: int) -> Workbench:
        if size <= 0:
            raise ValueError(f"workbench size must be > 0, got {size}")
        return cls(slots=[None] * size)

    def is_empty(self) -> bool:
        return all(slot is None for slot in self.slots)

    def first_empty(self) -> int | None:
        """Index of the leftmost empty slot, or None when full."""
        for index, slot in enumerate(self.slots):
            if slot is None:
                return index
        return None

    def ingredients(self) -> dict[Material, int]:
        """Material tally across occupied slots."""
        return tally(self.slots)

    def take(self, index: int) -> Material | None:
        """Empty one slot and return what it held."""
        if not 0 <= index < len(self.slots):
            raise ValueError(f"slot index out of range: {index}")
        material = self.slots[index]
        self.slots[index] = None
        return material

    def take_all(self) -> list[Material]:
        """Empty every slot and return the materials, left to right."""
        taken = [slot for slot in self.slots if slot is not None]
        self.slots = [None] * len(self.slots)
        return taken


@dataclass
class Furnace:
    """Processing stage. ``pending_input`` and ``current_recipe`` are set together."""

    temperature: Temperature = Temperature.MEDIUM
    pending_input: dict[Material, int] | None = None
    current_recipe: Recipe | None = None
    is_processing: bool = False
    progress: float = 0.0

    @property
    def state(self) -> FurnaceState:
        if self.is_processing:
            return FurnaceState.PROCESSING
        if self.current_recipe is not None:
            return FurnaceState.LOADED
        return FurnaceState.IDLE

    def load(self, recipe: Recipe, ingredients: dict[Material, int]) -> None:
        self.pending_input = dict(ingredients)
        self.current_recipe = recipe
        self.is_processing = False
        self.progress = 0.0

    def ignite(self) -> None:
        self.is_processing = True
        self.progress = 0.0

    def advance(self, dt: float) -> bool:
        """Add ``dt / processing_time`` to progress. Returns True once progress is full."""
        if not self.is_processing or self.current_recipe is None:
            return False
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self.progress = min(1.0, self.progress + dt / self.current_recipe.processing_time)
        return self.progress >= 1.0

    def reset(self) -> None:
        self.pending_input = None
        self.current_recipe = None
        self.is_processing = False
        self.progress = 0.0
