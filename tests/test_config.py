"""Tests for WorkshopConfig and YAML loading."""
from __future__ import annotations

import logging

import pytest

from bottega import ConfigError, Material, StationType, WorkshopConfig, load_config


class TestWorkshopConfig:
    def test_defaults(self) -> None:
        config = WorkshopConfig()
        assert config.workbench_size == 4
        assert config.respawn_interval == 15.0
        assert config.journeyman_threshold == 5
        assert config.master_threshold == 15
        assert config.auto_complete is True
        assert config.station_stock is None

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            WorkshopConfig().streak_bonus = 9  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"workbench_size": 0},
            {"workbench_size": 3},
            {"auto_complete": "no"},
            {"auto_complete": 1},
            {"respawn_interval": 0},
            {"streak_bonus": -1},
            {"journeyman_threshold": 10, "master_threshold": 5},
            {"journeyman_threshold": 0},
        ],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ConfigError):
            WorkshopConfig(**kwargs)

    def test_workbench_fits_largest_recipe(self) -> None:
        with pytest.raises(ConfigError, match="workbench_size must be >= 4"):
            WorkshopConfig(workbench_size=3)
        assert WorkshopConfig(workbench_size=6).workbench_size == 6


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="bottega.config"):
            config = load_config(tmp_path / "absent.yaml")
        assert config == WorkshopConfig()
        assert "not found" in caplog.text

    def test_empty_file_gives_defaults(self, tmp_path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == WorkshopConfig()

    def test_loads_values(self, tmp_path) -> None:
        path = tmp_path / "workshop.yaml"
        path.write_text(
            "respawn_interval: 5\n"
            "streak_bonus: 4\n"
            "auto_complete: false\n"
            "station_stock:\n"
            "  Volcano:\n"
            "    Volcanic Ash: 2\n"
        )
        config = load_config(path)
        assert config.respawn_interval == 5
        assert config.streak_bonus == 4
        assert config.auto_complete is False
        assert config.station_stock == {StationType.VOLCANO: {Material.VOLCANIC_ASH: 2}}

    def test_quoted_auto_complete_rejected(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text('auto_complete: "no"\n')
        with pytest.raises(ConfigError, match="auto_complete"):
            load_config(path)

    def test_unknown_key(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("furnace_colour: red\n")
        with pytest.raises(ConfigError, match="furnace_colour"):
            load_config(path)

    def test_unknown_station(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("station_stock:\n  Moon:\n    Sand: 1\n")
        with pytest.raises(ConfigError, match="unknown station"):
            load_config(path)

    def test_unknown_material(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("station_stock:\n  River:\n    Gold: 1\n")
        with pytest.raises(ConfigError, match="unknown material"):
            load_config(path)

    def test_negative_stock(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("station_stock:\n  River:\n    Sand: -2\n")
        with pytest.raises(ConfigError, match="non-negative"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(path)
