"""Tests for WorkshopLoop."""
from __future__ import annotations

import pytest

from bottega import CraftingEconomy, Material, StationType, WorkshopConfig, WorkshopLoop


class TestWorkshopLoop:
    def test_step_counts_ticks(self) -> None:
        loop = WorkshopLoop(CraftingEconomy(), tps=10)
        loop.step()
        loop.step()
        assert loop.tick_count == 2

    def test_run_drives_respawn(self) -> None:
        economy = CraftingEconomy(WorkshopConfig(respawn_interval=1.0))
        economy.collect(StationType.FOREST, Material.TIMBER)
        loop = WorkshopLoop(economy, tps=4)
        loop.run(4)
        assert economy.stock(StationType.FOREST, Material.TIMBER) == 12

    def test_hooks(self) -> None:
        economy = CraftingEconomy()
        loop = WorkshopLoop(economy, tps=20)
        calls = []
        loop.on_start(lambda e: calls.append(("start", e is economy)))
        loop.on_stop(lambda e: calls.append(("stop", loop.tick_count)))
        loop.run(3)
        assert calls == [("start", True), ("stop", 3)]

    def test_stop_from_handler_ends_run_early(self) -> None:
        economy = CraftingEconomy()
        loop = WorkshopLoop(economy, tps=4)

        def stop_on_respawn(name: str, data: dict) -> None:
            loop.stop()

        economy.subscribe("respawned", stop_on_respawn)
        economy.collect(StationType.RIVER, Material.SAND)
        loop.run(1000)
        # 15 second respawn interval at 4 ticks per second
        assert loop.tick_count == 60

    def test_run_forever_in_background(self) -> None:
        economy = CraftingEconomy()
        loop = WorkshopLoop(economy, tps=200)
        loop.on_start(lambda e: loop.stop())
        thread = loop.start_background()
        thread.join(timeout=5)
        assert not thread.is_alive()

    def test_invalid_tps(self) -> None:
        with pytest.raises(ValueError):
            WorkshopLoop(CraftingEconomy(), tps=0)
