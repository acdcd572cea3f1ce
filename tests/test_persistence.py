"""Tests for snapshot/restore and JsonSaveStore."""
from __future__ import annotations

import json
import logging

import pytest

from bottega import (
    CraftedItem,
    CraftingEconomy,
    JobTier,
    JsonSaveStore,
    Material,
    SnapshotError,
    StationType,
    restore,
    snapshot,
)


def _played_economy() -> CraftingEconomy:
    economy = CraftingEconomy(seed=1)
    economy.collect(StationType.QUARRY, Material.LIMESTONE)
    economy.collect(StationType.QUARRY, Material.LIMESTONE)
    economy.collect(StationType.RIVER, Material.SAND)
    economy.inventory.crafted[CraftedItem.GLASS_PANES] = 2
    economy.board.florins = 31
    economy.board.completed = 3
    economy.board.streak = 2
    return economy


class TestSnapshot:
    def test_is_json_compatible(self) -> None:
        data = snapshot(_played_economy())
        assert json.loads(json.dumps(data)) == data

    def test_uses_display_names(self) -> None:
        data = snapshot(_played_economy())
        assert data["inventory"]["raw"] == {"Limestone": 2, "Sand": 1}
        assert data["inventory"]["crafted"] == {"Glass Panes": 2}
        assert data["stations"]["Quarry"]["Limestone"] == 6
        assert data["board"] == {
            "tier": "Apprentice",
            "completed": 3,
            "streak": 2,
            "florins": 31,
        }

    def test_staged_materials_saved_as_held(self) -> None:
        economy = _played_economy()
        economy.place_on_workbench(Material.LIMESTONE)
        data = snapshot(economy)
        assert data["inventory"]["raw"]["Limestone"] == 2


class TestRoundTrip:
    def test_restore_reproduces_state(self) -> None:
        source = _played_economy()
        target = CraftingEconomy(seed=2)
        restore(target, json.loads(json.dumps(snapshot(source))))
        assert target.inventory.raw == source.inventory.raw
        assert target.inventory.crafted == source.inventory.crafted
        assert target.stations.current == source.stations.current
        assert target.florins == 31
        assert target.completed_jobs == 3
        assert target.streak == 2
        assert target.tier is JobTier.APPRENTICE

    def test_restore_empties_staging(self) -> None:
        economy = _played_economy()
        economy.place_on_workbench(Material.SAND)
        restore(economy, snapshot(economy))
        assert economy.workbench.is_empty()
        assert economy.raw_count(Material.SAND) == 1


class TestRestoreErrors:
    def test_version_mismatch(self) -> None:
        data = snapshot(CraftingEconomy())
        data["version"] = 99
        with pytest.raises(SnapshotError, match="Unsupported snapshot version"):
            restore(CraftingEconomy(), data)

    def test_unknown_material(self) -> None:
        data = snapshot(CraftingEconomy())
        data["inventory"]["raw"] = {"Gold": 1}
        with pytest.raises(SnapshotError, match="unknown Material"):
            restore(CraftingEconomy(), data)

    def test_negative_count(self) -> None:
        data = snapshot(CraftingEconomy())
        data["inventory"]["crafted"] = {"Glass Panes": -1}
        with pytest.raises(SnapshotError, match="non-negative"):
            restore(CraftingEconomy(), data)

    def test_material_not_at_station(self) -> None:
        data = snapshot(CraftingEconomy())
        data["stations"]["Forest"] = {"Clay": 1}
        with pytest.raises(SnapshotError, match="not stocked"):
            restore(CraftingEconomy(), data)

    def test_failed_restore_changes_nothing(self) -> None:
        economy = _played_economy()
        data = snapshot(economy)
        data["board"]["tier"] = "Pope"
        with pytest.raises(SnapshotError):
            restore(economy, data)
        assert economy.raw_count(Material.LIMESTONE) == 2
        assert economy.florins == 31

    def test_station_stock_clamped_to_maximum(self) -> None:
        data = snapshot(CraftingEconomy())
        data["stations"]["Volcano"] = {"Volcanic Ash": 60}
        economy = CraftingEconomy()
        restore(economy, data)
        assert economy.stock(StationType.VOLCANO, Material.VOLCANIC_ASH) == 6

    def test_material_missing_from_station_restores_empty(self) -> None:
        data = snapshot(CraftingEconomy())
        data["stations"]["Quarry"] = {"Marble": 2}
        economy = CraftingEconomy()
        restore(economy, data)
        assert economy.stations.current[StationType.QUARRY] == {
            Material.LIMESTONE: 0,
            Material.MARBLE_DUST: 0,
            Material.MARBLE: 2,
        }


class TestJsonSaveStore:
    def test_load_missing_returns_none(self, tmp_path) -> None:
        assert JsonSaveStore(tmp_path / "save.json").load() is None

    def test_save_then_load(self, tmp_path) -> None:
        store = JsonSaveStore(tmp_path / "nested" / "save.json")
        store.save({"version": 1, "x": [1, 2]})
        assert store.load() == {"version": 1, "x": [1, 2]}
        assert list(store.path.parent.iterdir()) == [store.path]

    def test_corrupt_file(self, tmp_path) -> None:
        path = tmp_path / "save.json"
        path.write_text("{not json")
        with pytest.raises(SnapshotError, match="corrupt"):
            JsonSaveStore(path).load()

    def test_economy_saves_after_each_change(self, tmp_path) -> None:
        store = JsonSaveStore(tmp_path / "save.json")
        economy = CraftingEconomy(store=store)
        economy.collect(StationType.RIVER, Material.WATER)
        assert store.load()["inventory"]["raw"] == {"Water": 1}

    def test_economy_restores_from_store(self, tmp_path) -> None:
        store = JsonSaveStore(tmp_path / "save.json")
        first = CraftingEconomy(store=store)
        first.collect(StationType.FOREST, Material.TIMBER)
        second = CraftingEconomy(store=store)
        assert second.raw_count(Material.TIMBER) == 1
        assert second.stock(StationType.FOREST, Material.TIMBER) == 11

    def test_depleted_station_stays_empty_after_reload(self, tmp_path) -> None:
        store = JsonSaveStore(tmp_path / "save.json")
        first = CraftingEconomy(store=store)
        while first.collect(StationType.VOLCANO, Material.VOLCANIC_ASH):
            pass
        assert store.load()["stations"]["Volcano"] == {"Volcanic Ash": 0}

        second = CraftingEconomy(store=store)
        assert second.stock(StationType.VOLCANO, Material.VOLCANIC_ASH) == 0
        assert second.raw_count(Material.VOLCANIC_ASH) == 6

    def test_restore_applies_pending_promotion(self, tmp_path) -> None:
        store = JsonSaveStore(tmp_path / "save.json")
        data = snapshot(CraftingEconomy())
        data["board"]["completed"] = 20
        store.save(data)
        assert CraftingEconomy(store=store).tier is JobTier.MASTER

    def test_failed_save_is_dropped(self, caplog) -> None:
        class BrokenStore:
            def load(self):
                return None

            def save(self, data):
                raise OSError("disk full")

        economy = CraftingEconomy(store=BrokenStore())
        with caplog.at_level(logging.WARNING, logger="bottega.economy"):
            assert economy.collect(StationType.RIVER, Material.SAND)
        assert economy.raw_count(Material.SAND) == 1
        assert "disk full" in caplog.text
