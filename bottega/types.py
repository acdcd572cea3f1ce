"""Shared enums and exceptions for the workshop economy."""
from __future__ import annotations

from enum import Enum


class Material(str, Enum):
    """Raw materials gathered at stations."""

    LIMESTONE = "Limestone"
    VOLCANIC_ASH = "Volcanic Ash"
    SAND = "Sand"
    WATER = "Water"
    IRON_ORE = "Iron Ore"
    CLAY = "Clay"
    MARBLE_DUST = "Marble Dust"
    RED_OCHRE = "Red Ochre"
    LAPIS_BLUE = "Lapis Blue"
    VERDIGRIS_GREEN = "Verdigris Green"
    TIMBER = "Timber"
    LEAD = "Lead"
    MARBLE = "Marble"
    SILK = "Silk"


class CraftedItem(str, Enum):
    """Finished goods produced by the furnace."""

    LIME_MORTAR = "Lime Mortar"
    ROMAN_CONCRETE = "Roman Concrete"
    TERRACOTTA_TILES = "Terracotta Tiles"
    RED_FRESCO_PIGMENT = "Red Fresco Pigment"
    BLUE_FRESCO_PIGMENT = "Blue Fresco Pigment"
    BRONZE_FITTINGS = "Bronze Fittings"
    TIMBER_BEAMS = "Timber Beams"
    GLASS_PANES = "Glass Panes"
    STAINED_GLASS = "Stained Glass"
    MARBLE_SLABS = "Marble Slabs"
    LEAD_SHEETING = "Lead Sheeting"
    SILK_FABRIC = "Silk Fabric"
    CARVED_WOOD = "Carved Wood"


class Temperature(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class StationType(str, Enum):
    """Map locations that yield raw materials."""

    QUARRY = "Quarry"
    RIVER = "River"
    VOLCANO = "Volcano"
    CLAY_PIT = "Clay Pit"
    MINE = "Mine"
    PIGMENT_TABLE = "Pigment Table"
    FOREST = "Forest"
    MARKET = "Market"


class JobTier(str, Enum):
    """Guild ranks, lowest first."""

    APPRENTICE = "Apprentice"
    JOURNEYMAN = "Journeyman"
    MASTER = "Master"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    def lower(self) -> JobTier:
        """The tier below, or this tier at the floor."""
        return _TIER_ORDER[max(0, self.rank - 1)]

    def higher(self) -> JobTier:
        """The tier above, or this tier at the ceiling."""
        return _TIER_ORDER[min(len(_TIER_ORDER) - 1, self.rank + 1)]


_TIER_ORDER = (JobTier.APPRENTICE, JobTier.JOURNEYMAN, JobTier.MASTER)


class SnapshotError(Exception):
    """Raised on restore failures (version mismatch, unknown key, bad count)."""


class ConfigError(Exception):
    """Raised when a configuration file holds unknown keys or invalid values."""
