"""bottega - Crafting economy for a Renaissance workshop."""
from __future__ import annotations

from bottega.board import JobBoard
from bottega.clock import Periodic
from bottega.config import WorkshopConfig, load_config
from bottega.crafting import Furnace, FurnaceState, Workbench
from bottega.economy import CraftingEconomy
from bottega.inventory import Inventory, InventoryHelper
from bottega.jobs import JOBS, Job, JobSession, job_choices, random_job
from bottega.loop import WorkshopLoop
from bottega.persistence import JsonSaveStore, restore, snapshot
from bottega.recipe import RECIPES, Recipe, detect_recipe, recipe_for
from bottega.signals import SignalBus
from bottega.stations import DEFAULT_STATION_STOCK, StationStock
from bottega.types import (
    ConfigError,
    CraftedItem,
    JobTier,
    Material,
    SnapshotError,
    StationType,
    Temperature,
)

__all__ = [
    "ConfigError",
    "CraftedItem",
    "CraftingEconomy",
    "DEFAULT_STATION_STOCK",
    "Furnace",
    "FurnaceState",
    "Inventory",
    "InventoryHelper",
    "JOBS",
    "Job",
    "JobBoard",
    "JobSession",
    "JobTier",
    "JsonSaveStore",
    "Material",
    "Periodic",
    "RECIPES",
    "Recipe",
    "SignalBus",
    "SnapshotError",
    "StationStock",
    "StationType",
    "Temperature",
    "Workbench",
    "WorkshopConfig",
    "WorkshopLoop",
    "detect_recipe",
    "job_choices",
    "load_config",
    "random_job",
    "recipe_for",
    "restore",
    "snapshot",
]
