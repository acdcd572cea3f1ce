"""Snapshot/restore of economy state and a JSON file store."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from bottega.inventory import InventoryHelper
from bottega.types import CraftedItem, JobTier, Material, SnapshotError, StationType

if TYPE_CHECKING:
    from bottega.economy import CraftingEconomy

logger = logging.getLogger(__name__)

_SNAPSHOT_VERSION = 1

E = TypeVar("E", bound=Enum)


def snapshot(economy: CraftingEconomy) -> dict[str, Any]:
    """Serialize persistent state to a JSON-compatible dict.

    Materials staged on the workbench or in the furnace are saved as held,
    since neither survives a session boundary.
    """
    raw = dict(economy.inventory.raw)
    InventoryHelper.merge(raw, economy.workbench.ingredients())
    InventoryHelper.merge(raw, economy.furnace.pending_input or {})
    return {
        "version": _SNAPSHOT_VERSION,
        "inventory": {
            "raw": _encode_counts(raw),
            "crafted": _encode_counts(economy.inventory.crafted),
        },
        "stations": {
            station.value: _encode_stock(materials)
            for station, materials in economy.stations.current.items()
        },
        "board": {
            "tier": economy.board.tier.value,
            "completed": economy.board.completed,
            "streak": economy.board.streak,
            "florins": economy.board.florins,
        },
    }


def restore(economy: CraftingEconomy, data: dict[str, Any]) -> None:
    """Load state produced by ``snapshot``. Raises SnapshotError on bad data.

    Nothing is modified unless the whole snapshot decodes. The workbench and
    furnace are emptied; their contents were saved into the raw counts.
    Each saved station replaces its live stock; a material absent from the
    save is restored as depleted.
    """
    version = data.get("version")
    if version != _SNAPSHOT_VERSION:
        raise SnapshotError(
            f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
        )

    inventory = data.get("inventory", {})
    raw = _decode_counts(Material, inventory.get("raw", {}))
    crafted = _decode_counts(CraftedItem, inventory.get("crafted", {}))

    stations: dict[StationType, dict[Material, int]] = {}
    for name, materials in data.get("stations", {}).items():
        station = _decode_key(StationType, name)
        caps = economy.stations.maximum.get(station, {})
        decoded = _decode_counts(Material, materials)
        for material, count in decoded.items():
            if material not in caps:
                raise SnapshotError(
                    f"{material.value} is not stocked at {station.value}"
                )
        stations[station] = {
            material: min(decoded.get(material, 0), cap)
            for material, cap in caps.items()
        }

    board = data.get("board", {})
    tier = _decode_key(JobTier, board.get("tier", JobTier.APPRENTICE.value))
    counters = {}
    for name in ("completed", "streak", "florins"):
        counters[name] = _decode_int(name, board.get(name, 0))

    economy.workbench.take_all()
    economy.furnace.reset()
    economy.inventory.raw = raw
    economy.inventory.crafted = crafted
    for station, materials in stations.items():
        economy.stations.current[station] = materials
    economy.board.tier = tier
    economy.board.completed = counters["completed"]
    economy.board.streak = counters["streak"]
    economy.board.florins = counters["florins"]


def _encode_counts(counts: dict[E, int]) -> dict[str, int]:
    return {key.value: count for key, count in counts.items() if count > 0}


def _encode_stock(materials: dict[Material, int]) -> dict[str, int]:
    # Depleted materials stay in the save; a missing key restores as empty.
    return {material.value: count for material, count in materials.items()}


def _decode_key(enum_type: type[E], name: Any) -> E:
    try:
        return enum_type(name)
    except ValueError:
        raise SnapshotError(f"unknown {enum_type.__name__} {name!r}") from None


def _decode_int(name: str, value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise SnapshotError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def _decode_counts(enum_type: type[E], data: Any) -> dict[E, int]:
    if not isinstance(data, dict):
        raise SnapshotError(f"expected a mapping of {enum_type.__name__} counts")
    result: dict[E, int] = {}
    for name, count in data.items():
        key = _decode_key(enum_type, name)
        count = _decode_int(f"{enum_type.__name__} {name}", count)
        if count > 0:
            result[key] = count
    return result


class JsonSaveStore:
    """Stores one snapshot as a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any] | None:
        """Read the saved snapshot, or None when nothing has been saved."""
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except json.JSONDecodeError as e:
            raise SnapshotError(f"corrupt save file {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise SnapshotError(f"save file {self._path} does not hold an object")
        return data

    def save(self, data: dict[str, Any]) -> None:
        """Write *data*, replacing any previous save in one step."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp, self._path)
        except BaseException:
            os.unlink(tmp)
            raise
        logger.debug("saved economy to %s", self._path)
