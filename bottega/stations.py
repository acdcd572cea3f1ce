"""Resource stations with finite, regenerating stock."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field

from bottega.types import Material, StationType

DEFAULT_STATION_STOCK: dict[StationType, dict[Material, int]] = {
    StationType.QUARRY: {Material.LIMESTONE: 8, Material.MARBLE_DUST: 4, Material.MARBLE: 6},
    StationType.RIVER: {Material.WATER: 12, Material.SAND: 10},
    StationType.VOLCANO: {Material.VOLCANIC_ASH: 6},
    StationType.CLAY_PIT: {Material.CLAY: 10},
    StationType.MINE: {Material.IRON_ORE: 6, Material.LEAD: 5},
    StationType.PIGMENT_TABLE: {
        Material.RED_OCHRE: 5,
        Material.LAPIS_BLUE: 3,
        Material.VERDIGRIS_GREEN: 4,
    },
    StationType.FOREST: {Material.TIMBER: 12},
    StationType.MARKET: {Material.SILK: 4, Material.LEAD: 3, Material.MARBLE: 3},
}

STATION_HINTS: dict[StationType, str] = {
    StationType.QUARRY: (
        "Limestone is calcium carbonate. The Romans quarried it for mortar and "
        "concrete. Marble dust adds strength!"
    ),
    StationType.RIVER: (
        "Sand and water are essential binding agents. Da Vinci studied water "
        "flow in his famous notebooks."
    ),
    StationType.VOLCANO: (
        "Volcanic ash (pozzolana) from Mount Vesuvius made Roman concrete so "
        "strong it still stands today!"
    ),
    StationType.CLAY_PIT: (
        "Clay fires into terracotta at over 1000°C. 'Terra cotta' means "
        "'baked earth' in Italian."
    ),
    StationType.MINE: (
        "Iron ore was smelted for tools and nails. Lead was cast into sheets for "
        "waterproof roofing and water pipes!"
    ),
    StationType.PIGMENT_TABLE: (
        "Renaissance painters ground minerals into pigments. Lapis lazuli blue "
        "was rarer than gold!"
    ),
    StationType.FOREST: (
        "Oak and chestnut timber framed roofs across Italy. Walnut was prized "
        "for fine furniture and carved panels."
    ),
    StationType.MARKET: (
        "Merchants traded silk from the East, lead ingots from mines, and marble "
        "blocks quarried across the Mediterranean."
    ),
}


@dataclass
class StationStock:
    """Current and maximum stock for every station.

    Attributes:
        maximum: Station -> material -> configured cap. Fixed for the session.
        current: Station -> material -> remaining count, ``0 <= current <= maximum``.
    """

    maximum: dict[StationType, dict[Material, int]] = field(
        default_factory=lambda: copy.deepcopy(DEFAULT_STATION_STOCK)
    )
    current: dict[StationType, dict[Material, int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for station, caps in self.maximum.items():
            for material, cap in caps.items():
                if cap < 0:
                    raise ValueError(
                        f"maximum stock must be >= 0, got {station.value}/{material.value}={cap}"
                    )
        if not self.current:
            self.current = copy.deepcopy(self.maximum)

    @classmethod
    def full(
        cls, maximum: dict[StationType, dict[Material, int]] | None = None
    ) -> StationStock:
        """Build stations filled to their maximum."""
        if maximum is None:
            return cls()
        return cls(maximum=copy.deepcopy(maximum))


def stock(stations: StationStock, station: StationType, material: Material) -> int:
    """Remaining count of *material* at *station*, zero when not stocked there."""
    return stations.current.get(station, {}).get(material, 0)


def total_stock(stations: StationStock, station: StationType) -> int:
    """Sum of every material remaining at *station*."""
    return sum(stations.current.get(station, {}).values())


def collect(stations: StationStock, station: StationType, material: Material) -> bool:
    """Take one unit from a station. Returns False when none is left."""
    remaining = stock(stations, station, material)
    if remaining <= 0:
        return False
    stations.current[station][material] = remaining - 1
    return True


def respawn(stations: StationStock) -> dict[StationType, list[Material]]:
    """Add one unit to every station material below its maximum.

    Returns the materials that grew, keyed by station.
    """
    grown: dict[StationType, list[Material]] = {}
    for station, caps in stations.maximum.items():
        current = stations.current.setdefault(station, {})
        for material, cap in caps.items():
            count = current.get(material, 0)
            if count < cap:
                current[material] = min(count + 1, cap)
                grown.setdefault(station, []).append(material)
    return grown
