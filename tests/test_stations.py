"""Tests for station stock, collection, and respawn."""
from __future__ import annotations

import pytest

from bottega import DEFAULT_STATION_STOCK, Material, StationStock, StationType
from bottega.stations import (
    STATION_HINTS,
    collect,
    respawn,
    stock,
    total_stock,
)


class TestStationStock:
    def test_starts_full(self) -> None:
        stations = StationStock()
        assert stations.current == DEFAULT_STATION_STOCK
        assert stations.current is not stations.maximum

    def test_defaults_not_shared(self) -> None:
        stations = StationStock()
        collect(stations, StationType.QUARRY, Material.LIMESTONE)
        assert DEFAULT_STATION_STOCK[StationType.QUARRY][Material.LIMESTONE] == 8
        assert StationStock().current[StationType.QUARRY][Material.LIMESTONE] == 8

    def test_full_with_custom_maximum(self) -> None:
        stations = StationStock.full({StationType.FOREST: {Material.TIMBER: 2}})
        assert stations.current == {StationType.FOREST: {Material.TIMBER: 2}}

    def test_negative_maximum_raises(self) -> None:
        with pytest.raises(ValueError, match="maximum stock"):
            StationStock(maximum={StationType.FOREST: {Material.TIMBER: -1}})

    def test_every_station_has_a_hint(self) -> None:
        assert set(STATION_HINTS) == set(StationType)

    def test_starting_stock_matches_table(self) -> None:
        stations = StationStock()
        assert stock(stations, StationType.QUARRY, Material.LIMESTONE) == 8
        assert stock(stations, StationType.VOLCANO, Material.VOLCANIC_ASH) == 6
        assert total_stock(stations, StationType.PIGMENT_TABLE) == 12


class TestCollect:
    def test_collect_decrements(self) -> None:
        stations = StationStock()
        assert collect(stations, StationType.RIVER, Material.SAND)
        assert stock(stations, StationType.RIVER, Material.SAND) == 9

    def test_collect_until_empty(self) -> None:
        stations = StationStock()
        for _ in range(6):
            assert collect(stations, StationType.VOLCANO, Material.VOLCANIC_ASH)
        assert not collect(stations, StationType.VOLCANO, Material.VOLCANIC_ASH)
        assert stock(stations, StationType.VOLCANO, Material.VOLCANIC_ASH) == 0

    def test_material_not_at_station(self) -> None:
        stations = StationStock()
        assert not collect(stations, StationType.FOREST, Material.CLAY)
        assert Material.CLAY not in stations.current[StationType.FOREST]


class TestRespawn:
    def test_full_stations_do_not_grow(self) -> None:
        stations = StationStock()
        assert respawn(stations) == {}
        assert stations.current == DEFAULT_STATION_STOCK

    def test_adds_one_per_depleted_material(self) -> None:
        stations = StationStock()
        for _ in range(3):
            collect(stations, StationType.QUARRY, Material.LIMESTONE)
        collect(stations, StationType.QUARRY, Material.MARBLE)
        grown = respawn(stations)
        assert sorted(grown[StationType.QUARRY], key=lambda m: m.value) == [
            Material.LIMESTONE,
            Material.MARBLE,
        ]
        assert stock(stations, StationType.QUARRY, Material.LIMESTONE) == 6
        assert stock(stations, StationType.QUARRY, Material.MARBLE) == 6

    def test_never_exceeds_maximum(self) -> None:
        stations = StationStock()
        for _ in range(6):
            collect(stations, StationType.VOLCANO, Material.VOLCANIC_ASH)
        for _ in range(20):
            respawn(stations)
            for station, caps in stations.maximum.items():
                for material, cap in caps.items():
                    assert stock(stations, station, material) <= cap
        assert stock(stations, StationType.VOLCANO, Material.VOLCANIC_ASH) == 6
