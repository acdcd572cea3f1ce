"""A day at the workshop -- collect, craft, and finish a job.

Demonstrates:
- Collecting materials from stations
- Staging them on the workbench and firing the furnace
- Driving furnace progress and station respawn with a WorkshopLoop
- Accepting and completing a job for florins
- Saving progress to a JSON file

Run: python -m examples.workshop_day
"""

import logging
import tempfile
from pathlib import Path

from bottega import (
    CraftedItem,
    CraftingEconomy,
    JobTier,
    JsonSaveStore,
    Material,
    StationType,
    WorkshopLoop,
    recipe_for,
)
from bottega.jobs import JOBS


def print_status(name: str, data: dict) -> None:
    if data.get("message"):
        print(f"  > {data['message']}")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print("=== A Day at the Bottega ===\n")

    save_path = Path(tempfile.mkdtemp()) / "bottega.json"
    economy = CraftingEconomy(seed=42, store=JsonSaveStore(save_path))
    economy.subscribe("status", print_status)

    # The master wants Roman concrete.
    job = next(j for j in JOBS[JobTier.MASTER] if j.craft_target is CraftedItem.ROMAN_CONCRETE)
    economy.accept_job(job)
    print(f"\nJob: {job.title} ({job.trade_name}) for {job.reward_florins} florins")

    print("\nCollecting:")
    for _ in range(3):
        economy.collect(StationType.QUARRY, Material.LIMESTONE)
    economy.collect(StationType.VOLCANO, Material.VOLCANIC_ASH)
    print(f"  progress: { {m.value: n for m, n in economy.job_progress().items()} }")

    print("\nWorkbench:")
    for material in (Material.LIMESTONE, Material.LIMESTONE, Material.LIMESTONE, Material.VOLCANIC_ASH):
        economy.place_on_workbench(material)
    print(f"  detected: {economy.detected_recipe.output.value}")
    economy.mix()

    print("\nFurnace:")
    concrete = recipe_for(CraftedItem.ROMAN_CONCRETE)
    economy.start_processing()  # medium is already the default dial
    loop = WorkshopLoop(economy, tps=10)
    loop.run(int(concrete.processing_time * loop.tps) + 1)
    print(f"  {economy.educational_text}")

    print("\nJob board:")
    if economy.check_job_completion(economy.last_crafted):
        economy.complete_job()
    print(f"  florins={economy.florins} streak={economy.streak} tier={economy.tier.value}")
    print(f"\nSaved to {save_path}")


if __name__ == "__main__":
    main()
