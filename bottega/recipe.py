"""Recipe dataclass, the static recipe table, and recipe detection."""
from __future__ import annotations

from dataclasses import dataclass, field

from bottega.types import CraftedItem, Material, Temperature


@dataclass(frozen=True)
class Recipe:
    """Immutable furnace recipe.

    Attributes:
        output: Item produced on completion.
        ingredients: Exact material multiset required on the workbench.
        temperature: Furnace setting required to fire.
        processing_time: Seconds of furnace time at progress rate 1/s.
        educational_text: Shown to the player when the item is crafted.
    """

    output: CraftedItem
    ingredients: dict[Material, int] = field(default_factory=dict)
    temperature: Temperature = Temperature.MEDIUM
    processing_time: float = 4.0
    educational_text: str = ""

    def __post_init__(self) -> None:
        if not self.ingredients:
            raise ValueError(f"Recipe for {self.output.value} needs ingredients")
        for material, amount in self.ingredients.items():
            if amount <= 0:
                raise ValueError(
                    f"ingredient count must be > 0, got {material.value}={amount}"
                )
        if self.processing_time <= 0:
            raise ValueError(
                f"processing_time must be > 0, got {self.processing_time}"
            )

    def __hash__(self) -> int:
        return hash((self.output, frozenset(self.ingredients.items()), self.temperature))

    @property
    def size(self) -> int:
        """Number of workbench slots the ingredients occupy."""
        return sum(self.ingredients.values())


_M = Material
_T = Temperature

RECIPES: tuple[Recipe, ...] = (
    Recipe(
        output=CraftedItem.LIME_MORTAR,
        ingredients={_M.LIMESTONE: 2, _M.WATER: 1, _M.SAND: 1},
        temperature=_T.HIGH,
        processing_time=4.0,
        educational_text=(
            "Limestone (calcium carbonate) heats to 900°C becoming quicklime "
            "(calcium oxide), then mixed with water creates slaked lime! "
            "Romans used this for 2000 years."
        ),
    ),
    Recipe(
        output=CraftedItem.ROMAN_CONCRETE,
        ingredients={_M.LIMESTONE: 3, _M.VOLCANIC_ASH: 1},
        temperature=_T.MEDIUM,
        processing_time=5.0,
        educational_text=(
            "Romans discovered volcanic ash (pozzolana) creates concrete stronger "
            "than modern Portland cement. The Pantheon dome still stands after "
            "2000 years!"
        ),
    ),
    Recipe(
        output=CraftedItem.TERRACOTTA_TILES,
        ingredients={_M.CLAY: 3, _M.WATER: 1},
        temperature=_T.HIGH,
        processing_time=4.0,
        educational_text=(
            "Terra cotta means 'baked earth' in Italian. Firing clay at 1000°C "
            "creates the iconic red roof tiles of Florence!"
        ),
    ),
    Recipe(
        output=CraftedItem.RED_FRESCO_PIGMENT,
        ingredients={_M.RED_OCHRE: 2, _M.WATER: 1, _M.LIMESTONE: 1},
        temperature=_T.LOW,
        processing_time=3.0,
        educational_text=(
            "Fresco means 'fresh': pigments applied to wet lime plaster. The lime "
            "crystallizes around pigment, making colors last centuries!"
        ),
    ),
    Recipe(
        output=CraftedItem.BLUE_FRESCO_PIGMENT,
        ingredients={_M.LAPIS_BLUE: 2, _M.WATER: 1, _M.LIMESTONE: 1},
        temperature=_T.LOW,
        processing_time=3.0,
        educational_text=(
            "Lapis lazuli was more expensive than gold! Renaissance painters "
            "reserved ultramarine blue for the Virgin Mary's robes."
        ),
    ),
    Recipe(
        output=CraftedItem.BRONZE_FITTINGS,
        ingredients={_M.IRON_ORE: 2, _M.CLAY: 1},
        temperature=_T.HIGH,
        processing_time=5.0,
        educational_text=(
            "Bronze casting requires extreme heat to melt metal into clay molds. "
            "Renaissance craftsmen created elaborate door handles and "
            "decorations this way."
        ),
    ),
    Recipe(
        output=CraftedItem.TIMBER_BEAMS,
        ingredients={_M.TIMBER: 3, _M.IRON_ORE: 1},
        temperature=_T.MEDIUM,
        processing_time=3.0,
        educational_text=(
            "Timber beams were shaped with iron adzes and joined with iron nails. "
            "Oak and chestnut were prized for their strength and resistance to rot."
        ),
    ),
    Recipe(
        output=CraftedItem.GLASS_PANES,
        ingredients={_M.SAND: 2, _M.LIMESTONE: 1, _M.WATER: 1},
        temperature=_T.HIGH,
        processing_time=4.0,
        educational_text=(
            "Romans invented cast flat glass! Sand (silica) melts at 1700°C, but "
            "adding limestone and soda ash lowers it to 1000°C."
        ),
    ),
    Recipe(
        output=CraftedItem.STAINED_GLASS,
        ingredients={_M.SAND: 1, _M.LEAD: 1, _M.LAPIS_BLUE: 1, _M.LIMESTONE: 1},
        temperature=_T.HIGH,
        processing_time=5.0,
        educational_text=(
            "Stained glass windows told stories in light! Colored glass was cut, "
            "then joined with lead cames."
        ),
    ),
    Recipe(
        output=CraftedItem.MARBLE_SLABS,
        ingredients={_M.MARBLE: 3, _M.WATER: 1},
        temperature=_T.LOW,
        processing_time=3.0,
        educational_text=(
            "Marble was cut with sand-fed saws and polished with water. The "
            "Pantheon floor uses porphyry from Egypt and Carrara white."
        ),
    ),
    Recipe(
        output=CraftedItem.LEAD_SHEETING,
        ingredients={_M.LEAD: 2, _M.IRON_ORE: 1, _M.WATER: 1},
        temperature=_T.HIGH,
        processing_time=4.0,
        educational_text=(
            "Lead was melted and cast into sheets for waterproof roofing and "
            "pipes. Roman lead pipes (fistulae) supplied water to entire cities!"
        ),
    ),
    Recipe(
        output=CraftedItem.SILK_FABRIC,
        ingredients={_M.SILK: 2, _M.WATER: 1},
        temperature=_T.LOW,
        processing_time=3.0,
        educational_text=(
            "Leonardo specified starched taffeta (silk) for his flying machine "
            "wings: lightweight, airtight, and easily stretched over a frame."
        ),
    ),
    Recipe(
        output=CraftedItem.CARVED_WOOD,
        ingredients={_M.TIMBER: 2, _M.IRON_ORE: 1},
        temperature=_T.LOW,
        processing_time=4.0,
        educational_text=(
            "Walnut was the wood of choice for fine carving. The Padua Anatomy "
            "Theater is entirely carved walnut."
        ),
    ),
)


def validate_recipes(recipes: tuple[Recipe, ...] | list[Recipe]) -> None:
    """Raise ValueError if two recipes share an ingredient multiset."""
    seen: dict[frozenset[tuple[Material, int]], CraftedItem] = {}
    for recipe in recipes:
        key = frozenset(recipe.ingredients.items())
        if key in seen:
            raise ValueError(
                f"{recipe.output.value} and {seen[key].value} share ingredients"
            )
        seen[key] = recipe.output


def detect_recipe(
    ingredients: dict[Material, int],
    recipes: tuple[Recipe, ...] | list[Recipe] = RECIPES,
) -> Recipe | None:
    """Return the first recipe whose ingredients equal *ingredients* exactly."""
    if not ingredients:
        return None
    for recipe in recipes:
        if recipe.ingredients == ingredients:
            return recipe
    return None


def recipe_for(item: CraftedItem) -> Recipe:
    """Look up the recipe producing *item*. Raises KeyError if none does."""
    for recipe in RECIPES:
        if recipe.output is item:
            return recipe
    raise KeyError(item)


validate_recipes(RECIPES)
