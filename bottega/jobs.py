"""Workshop jobs: static tables, generation, and per-session progress."""
from __future__ import annotations

import random
from dataclasses import dataclass, field

from bottega.inventory import InventoryHelper
from bottega.types import CraftedItem, JobTier, Material


@dataclass(frozen=True)
class Job:
    """Immutable job description.

    Attributes:
        tier: Guild rank the job is offered at.
        title: Short task name.
        trade_name: Italian guild trade the job belongs to.
        requirements: Materials to collect after acceptance.
        craft_target: Item to craft after acceptance, or None for collect-only jobs.
        reward_florins: Base reward before streak bonus.
        flavor_text: Briefing shown on the job board.
        history_fact: Educational note shown on completion.
    """

    tier: JobTier
    title: str
    trade_name: str
    requirements: dict[Material, int] = field(default_factory=dict)
    craft_target: CraftedItem | None = None
    reward_florins: int = 0
    flavor_text: str = ""
    history_fact: str = ""

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("Job title must be non-empty")
        if self.reward_florins < 0:
            raise ValueError(f"reward_florins must be >= 0, got {self.reward_florins}")
        for material, amount in self.requirements.items():
            if amount <= 0:
                raise ValueError(
                    f"requirement must be > 0, got {material.value}={amount}"
                )

    def __hash__(self) -> int:
        return hash((
            self.tier,
            self.title,
            self.trade_name,
            frozenset(self.requirements.items()),
            self.craft_target,
            self.reward_florins,
        ))


_A, _J, _X = JobTier.APPRENTICE, JobTier.JOURNEYMAN, JobTier.MASTER
_M = Material

JOBS: dict[JobTier, tuple[Job, ...]] = {
    _A: (
        Job(_A, "Cut Timber", "Boscaiolo", {_M.TIMBER: 3}, None, 8,
            "The master needs timber for roof beams. Cut 3 logs in the forest!",
            "Renaissance woodcutters worked in teams with two-man crosscut saws "
            "and oxen to drag logs."),
        Job(_A, "Quarry Stone", "Tagliapietre", {_M.LIMESTONE: 3}, None, 8,
            "We need limestone blocks for mortar. Cut 3 blocks at the quarry!",
            "Stonecutters were among the highest-paid workers on building sites."),
        Job(_A, "Fetch Water & Sand", "Manovale", {_M.WATER: 2, _M.SAND: 2}, None, 6,
            "Every recipe needs water and sand. Fill buckets at the river!",
            "Manovali carried water, mixed mortar, and hauled materials up "
            "scaffolding."),
        Job(_A, "Dig Clay", "Fornaciaio", {_M.CLAY: 4}, None, 7,
            "The tile-makers need clay. Dig 4 loads from the clay pit!",
            "Fornaciai shaped bricks in wooden molds and dried them in the sun "
            "before firing."),
        Job(_A, "Mine Ore", "Minatore", {_M.IRON_ORE: 2}, None, 9,
            "The blacksmith needs iron. Mine 2 loads of iron ore!",
            "Agricola's 1556 'De Re Metallica' was the first scientific mining "
            "manual."),
        Job(_A, "Collect Volcanic Ash", "Pozzolanaro", {_M.VOLCANIC_ASH: 3}, None, 10,
            "Roman concrete needs volcanic ash. Collect 3 loads from the volcano!",
            "Pozzolana is named after Pozzuoli near Naples, where Romans found "
            "that volcanic ash makes concrete waterproof."),
        Job(_A, "Buy Silk at Market", "Setaiolo", {_M.SILK: 2}, None, 8,
            "Leonardo needs silk for his flying machine. Buy 2 bolts at the market!",
            "Florence's silk guild, the Arte della Seta, was one of the most "
            "powerful in the city."),
    ),
    _J: (
        Job(_J, "Prepare Mortar Ingredients", "Muratore",
            {_M.LIMESTONE: 2, _M.WATER: 1, _M.SAND: 1}, None, 14,
            "The masons need limestone, water, and sand. Gather them all!",
            "A master mason earned three to four times what a laborer made."),
        Job(_J, "Gather Concrete Materials", "Cementista",
            {_M.LIMESTONE: 3, _M.VOLCANIC_ASH: 1}, None, 16,
            "Roman concrete needs limestone and volcanic ash. Collect them!",
            "Roman concrete was poured in courses about 20cm thick and tamped "
            "down."),
        Job(_J, "Supply the Glassmaker", "Vetraio",
            {_M.SAND: 2, _M.LIMESTONE: 1, _M.WATER: 1}, None, 14,
            "The glass furnace is ready. Gather sand, limestone, and water!",
            "Venice forbade Murano glassmakers from leaving the island."),
        Job(_J, "Equip the Carpenter", "Falegname",
            {_M.TIMBER: 3, _M.IRON_ORE: 1}, None, 13,
            "The carpenter needs timber and iron nails!",
            "Falegnami built the scaffolding and centering for every arch."),
        Job(_J, "Prepare Pigment Supplies", "Speziale",
            {_M.RED_OCHRE: 2, _M.WATER: 1, _M.LIMESTONE: 1}, None, 15,
            "The fresco painter awaits! Gather ochre, water, and limestone.",
            "Speziali ground pigments on marble slabs with a stone muller."),
        Job(_J, "Stock the Forge", "Fabbro",
            {_M.IRON_ORE: 2, _M.CLAY: 1}, None, 14,
            "The forge is cold. Bring iron ore and clay for casting molds!",
            "A good fabbro could tell iron's temperature by its color."),
    ),
    _X: (
        Job(_X, "Build Roman Concrete", "Capomastro",
            {_M.LIMESTONE: 3, _M.VOLCANIC_ASH: 1}, CraftedItem.ROMAN_CONCRETE, 25,
            "The Pantheon needs repairs. Gather the ingredients AND craft concrete!",
            "Brunelleschi served as capomastro of the Duomo."),
        Job(_X, "Fire Terracotta Tiles", "Maestro Fornaciaio",
            {_M.CLAY: 3, _M.WATER: 1}, CraftedItem.TERRACOTTA_TILES, 22,
            "The Duomo needs roof tiles! Collect clay and water, then fire them.",
            "The best tiles rang like a bell when tapped."),
        Job(_X, "Craft Timber Beams", "Maestro d'Ascia",
            {_M.TIMBER: 3, _M.IRON_ORE: 1}, CraftedItem.TIMBER_BEAMS, 22,
            "The Roman Baths roof sags! Cut timber, mine iron, then shape beams.",
            "Maestri d'ascia could square a beam with only an axe and adze."),
        Job(_X, "Blow Glass Panes", "Maestro Vetraio",
            {_M.SAND: 2, _M.LIMESTONE: 1, _M.WATER: 1}, CraftedItem.GLASS_PANES, 24,
            "The Glassworks needs demonstration pieces. Blow glass!",
            "Murano's maestri vetrai alone knew how to make clear cristallo."),
        Job(_X, "Create Stained Glass", "Maestro delle Vetrate",
            {_M.SAND: 1, _M.LEAD: 1, _M.LAPIS_BLUE: 1, _M.LIMESTONE: 1},
            CraftedItem.STAINED_GLASS, 28,
            "A cathedral window awaits! Gather rare materials.",
            "A single stained glass window could hold more than 1000 pieces."),
        Job(_X, "Mix Lime Mortar", "Maestro Muratore",
            {_M.LIMESTONE: 2, _M.WATER: 1, _M.SAND: 1}, CraftedItem.LIME_MORTAR, 22,
            "The Aqueduct needs mortar! Quarry, fetch, then mix.",
            "The best mortar was slaked for months in pits."),
        Job(_X, "Grind Red Fresco Pigment", "Maestro dei Colori",
            {_M.RED_OCHRE: 2, _M.WATER: 1, _M.LIMESTONE: 1},
            CraftedItem.RED_FRESCO_PIGMENT, 24,
            "A chapel wall awaits color! Prepare red fresco pigment.",
            "Cennini's 'Il Libro dell'Arte' (1437) documented pigment recipes."),
        Job(_X, "Cast Bronze Fittings", "Maestro Fonditore",
            {_M.IRON_ORE: 2, _M.CLAY: 1}, CraftedItem.BRONZE_FITTINGS, 24,
            "The Arsenal doors need hardware! Mine ore, dig clay, cast bronze.",
            "Ghiberti spent 27 years casting the Baptistery doors."),
    ),
}


def random_job(tier: JobTier, rng: random.Random) -> Job:
    """Draw uniformly from the jobs offered at *tier*."""
    return rng.choice(JOBS[tier])


def unlocked_higher_tier(
    tier: JobTier,
    completed: int,
    journeyman_threshold: int = 5,
    master_threshold: int = 15,
) -> JobTier | None:
    """The tier above *tier* if enough jobs are done to preview it."""
    if tier is JobTier.APPRENTICE and completed >= journeyman_threshold:
        return JobTier.JOURNEYMAN
    if tier is JobTier.JOURNEYMAN and completed >= master_threshold:
        return JobTier.MASTER
    return None


def job_choices(
    tier: JobTier,
    completed: int,
    rng: random.Random,
    journeyman_threshold: int = 5,
    master_threshold: int = 15,
) -> list[Job]:
    """Three offers: current tier, one tier down, and one tier up when unlocked.

    At the floor the lower offer repeats the current tier; without an unlock
    the higher offer does too.
    """
    higher = unlocked_higher_tier(tier, completed, journeyman_threshold, master_threshold)
    return [
        random_job(tier, rng),
        random_job(tier.lower(), rng),
        random_job(higher if higher is not None else tier, rng),
    ]


@dataclass
class JobSession:
    """An accepted job and the progress made since accepting it.

    ``baseline`` is the raw inventory at acceptance. ``collected`` is the
    high-water mark of ``count - baseline`` per required material, so spending
    materials elsewhere never takes progress away.
    """

    job: Job
    baseline: dict[Material, int] = field(default_factory=dict)
    collected: dict[Material, int] = field(default_factory=dict)
    crafted_target: bool = False

    @classmethod
    def start(cls, job: Job, raw: dict[Material, int]) -> JobSession:
        baseline = {material: InventoryHelper.count(raw, material) for material in job.requirements}
        return cls(job=job, baseline=baseline, collected={m: 0 for m in job.requirements})

    def observe(self, raw: dict[Material, int]) -> None:
        """Fold the current raw inventory into collection progress."""
        for material, needed in self.job.requirements.items():
            delta = InventoryHelper.count(raw, material) - self.baseline.get(material, 0)
            gained = min(max(0, delta), needed)
            if gained > self.collected.get(material, 0):
                self.collected[material] = gained

    def record_craft(self, item: CraftedItem | None) -> None:
        if item is not None and item is self.job.craft_target:
            self.crafted_target = True

    def is_collection_complete(self) -> bool:
        return all(
            self.collected.get(material, 0) >= needed
            for material, needed in self.job.requirements.items()
        )

    def is_complete(self) -> bool:
        if not self.is_collection_complete():
            return False
        if self.job.craft_target is None:
            return True
        return self.crafted_target
