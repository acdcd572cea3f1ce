"""Economy tuning and YAML loading."""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from bottega.recipe import RECIPES
from bottega.types import ConfigError, Material, StationType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkshopConfig:
    """Immutable tuning for a CraftingEconomy.

    Attributes:
        workbench_size: Number of workbench slots, at least the largest recipe.
        respawn_interval: Seconds between station respawn steps.
        streak_bonus: Florins added per streak step to a job reward.
        journeyman_threshold: Completed jobs that promote an apprentice.
        master_threshold: Completed jobs that promote a journeyman.
        auto_complete: Finish furnace processing from ``tick`` when progress is full.
        station_stock: Replacement maximum stock table, or None for the defaults.
    """

    workbench_size: int = 4
    respawn_interval: float = 15.0
    streak_bonus: int = 2
    journeyman_threshold: int = 5
    master_threshold: int = 15
    auto_complete: bool = True
    station_stock: dict[StationType, dict[Material, int]] | None = None

    def __post_init__(self) -> None:
        largest = max(recipe.size for recipe in RECIPES)
        if self.workbench_size < largest:
            raise ConfigError(
                f"workbench_size must be >= {largest}, got {self.workbench_size}"
            )
        if self.respawn_interval <= 0:
            raise ConfigError(
                f"respawn_interval must be > 0, got {self.respawn_interval}"
            )
        if self.streak_bonus < 0:
            raise ConfigError(f"streak_bonus must be >= 0, got {self.streak_bonus}")
        if not 0 < self.journeyman_threshold <= self.master_threshold:
            raise ConfigError(
                "thresholds must satisfy 0 < journeyman_threshold <= master_threshold, "
                f"got {self.journeyman_threshold} and {self.master_threshold}"
            )
        if not isinstance(self.auto_complete, bool):
            raise ConfigError(
                f"auto_complete must be true or false, got {self.auto_complete!r}"
            )


def _parse_station_stock(raw: Any) -> dict[StationType, dict[Material, int]]:
    if not isinstance(raw, dict):
        raise ConfigError("station_stock must be a mapping of station -> materials")
    table: dict[StationType, dict[Material, int]] = {}
    for station_name, materials in raw.items():
        try:
            station = StationType(station_name)
        except ValueError:
            raise ConfigError(f"unknown station {station_name!r}") from None
        if not isinstance(materials, dict):
            raise ConfigError(f"stock for {station_name!r} must be a mapping")
        caps: dict[Material, int] = {}
        for material_name, cap in materials.items():
            try:
                material = Material(material_name)
            except ValueError:
                raise ConfigError(f"unknown material {material_name!r}") from None
            if not isinstance(cap, int) or isinstance(cap, bool) or cap < 0:
                raise ConfigError(
                    f"stock for {station_name}/{material_name} must be a "
                    f"non-negative integer, got {cap!r}"
                )
            caps[material] = cap
        table[station] = caps
    return table


def load_config(filepath: str | Path) -> WorkshopConfig:
    """Read a WorkshopConfig from YAML. A missing file yields the defaults."""
    path = Path(filepath)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("config file not found: %s, using defaults", path)
        return WorkshopConfig()
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(WorkshopConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown config keys in {path}: {', '.join(unknown)}")

    kwargs = dict(data)
    if kwargs.get("station_stock") is not None:
        kwargs["station_stock"] = _parse_station_stock(kwargs["station_stock"])
    try:
        config = WorkshopConfig(**kwargs)
    except TypeError as e:
        raise ConfigError(f"bad config in {path}: {e}") from e
    logger.debug("loaded config from %s", path)
    return config
