"""CraftingEconomy: the workshop's single owner of mutable state.

Every public method is one transaction. Transactions are serialized by a lock
so a host loop may drive ``tick`` from another thread while the UI calls the
rest. Signals raised during a transaction are delivered after the lock is
released, so handlers see committed state and may call back in.

Expected rejections (empty station, full workbench, unknown recipe, wrong
temperature, unmet job) never raise. They return False or None and leave a
human-readable ``status_message``.
"""
from __future__ import annotations

import logging
import random
import threading
from contextlib import contextmanager
from typing import Any, Iterator, Protocol

from bottega import signals
from bottega.board import JobBoard
from bottega.clock import Periodic
from bottega.config import WorkshopConfig
from bottega.crafting import Furnace, FurnaceState, Workbench
from bottega.inventory import Inventory, InventoryHelper
from bottega.jobs import Job, JobSession, job_choices, random_job
from bottega.persistence import restore, snapshot
from bottega.recipe import Recipe, detect_recipe
from bottega.signals import Handler, SignalBus
from bottega.stations import STATION_HINTS, StationStock
from bottega.stations import collect as take_from_station
from bottega.stations import respawn, stock, total_stock
from bottega.types import CraftedItem, JobTier, Material, StationType, Temperature

logger = logging.getLogger(__name__)


class SaveStore(Protocol):
    def load(self) -> dict[str, Any] | None: ...

    def save(self, data: dict[str, Any]) -> None: ...


class CraftingEconomy:
    def __init__(
        self,
        config: WorkshopConfig | None = None,
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
        bus: SignalBus | None = None,
        store: SaveStore | None = None,
    ) -> None:
        self._config = config if config is not None else WorkshopConfig()
        self._rng = rng if rng is not None else random.Random(seed)
        self._bus = bus if bus is not None else SignalBus()
        self._store = store
        self._lock = threading.Lock()
        self._dirty = False
        self._respawn_timer = Periodic(self._config.respawn_interval)

        self.inventory = Inventory()
        self.stations = StationStock.full(self._config.station_stock)
        self.workbench = Workbench.of_size(self._config.workbench_size)
        self.furnace = Furnace()
        self.board = JobBoard(
            streak_bonus=self._config.streak_bonus,
            journeyman_threshold=self._config.journeyman_threshold,
            master_threshold=self._config.master_threshold,
        )
        self.status_message: str | None = None
        self.educational_text: str | None = None
        self.last_crafted: CraftedItem | None = None

        if store is not None:
            data = store.load()
            if data is not None:
                restore(self, data)
                while self.board.promote() is not None:
                    pass
                logger.debug("restored economy from save")

    # -- plumbing -------------------------------------------------------

    @property
    def config(self) -> WorkshopConfig:
        return self._config

    @property
    def bus(self) -> SignalBus:
        return self._bus

    def subscribe(self, signal_name: str, handler: Handler) -> None:
        self._bus.subscribe(signal_name, handler)

    def unsubscribe(self, signal_name: str, handler: Handler) -> None:
        self._bus.unsubscribe(signal_name, handler)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        with self._lock:
            yield
            if self._dirty:
                self._dirty = False
                self._save()
        self._bus.flush()

    def _save(self) -> None:
        if self._store is None:
            return
        try:
            self._store.save(snapshot(self))
        except OSError as e:
            logger.warning("dropping save after I/O error: %s", e)

    def _status(self, message: str | None) -> None:
        self.status_message = message
        self._bus.publish(signals.STATUS, message=message)

    def _observe_job(self) -> None:
        if self.board.session is not None:
            self.board.session.observe(self.inventory.raw)

    # -- read accessors -------------------------------------------------

    def raw_count(self, material: Material) -> int:
        return InventoryHelper.count(self.inventory.raw, material)

    def crafted_count(self, item: CraftedItem) -> int:
        return InventoryHelper.count(self.inventory.crafted, item)

    def stock(self, station: StationType, material: Material) -> int:
        return stock(self.stations, station, material)

    def total_stock(self, station: StationType) -> int:
        return total_stock(self.stations, station)

    def hint_for(self, station: StationType) -> str:
        return STATION_HINTS[station]

    @property
    def workbench_ingredients(self) -> dict[Material, int]:
        return self.workbench.ingredients()

    @property
    def detected_recipe(self) -> Recipe | None:
        return detect_recipe(self.workbench.ingredients())

    @property
    def furnace_state(self) -> FurnaceState:
        return self.furnace.state

    @property
    def tier(self) -> JobTier:
        return self.board.tier

    @property
    def streak(self) -> int:
        return self.board.streak

    @property
    def completed_jobs(self) -> int:
        return self.board.completed

    @property
    def florins(self) -> int:
        return self.board.florins

    @property
    def active_job(self) -> Job | None:
        session = self.board.session
        return session.job if session is not None else None

    @property
    def session(self) -> JobSession | None:
        return self.board.session

    # -- stations -------------------------------------------------------

    def collect(self, station: StationType, material: Material) -> bool:
        """Take one unit of *material* from *station* into the inventory."""
        with self._transaction():
            if not take_from_station(self.stations, station, material):
                self._status(f"No {material.value} left here!")
                return False
            InventoryHelper.add(self.inventory.raw, material)
            self._observe_job()
            self._dirty = True
            self._status(f"Collected {material.value}!")
            self._bus.publish(
                signals.COLLECTED,
                station=station,
                material=material,
                remaining=stock(self.stations, station, material),
            )
            return True

    def respawn_stations(self) -> None:
        """Run one respawn step immediately."""
        with self._transaction():
            self._respawn_stations()

    def _respawn_stations(self) -> None:
        grown = respawn(self.stations)
        if grown:
            self._dirty = True
            logger.debug("respawned %d stations", len(grown))
            self._bus.publish(signals.RESPAWNED, grown=grown)

    def tick(self, dt: float) -> CraftedItem | None:
        """Advance time by *dt* seconds.

        Drives the station respawn timer and furnace progress. Returns the
        crafted item when this tick finished processing, else None.
        """
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        with self._transaction():
            if self._respawn_timer.advance(dt):
                self._respawn_stations()
            if self.furnace.advance(dt) and self._config.auto_complete:
                return self._complete_processing()
            return None

    # -- workbench ------------------------------------------------------

    def place_on_workbench(self, material: Material) -> bool:
        """Move one unit from the inventory to the leftmost empty slot."""
        with self._transaction():
            index = self.workbench.first_empty()
            if index is None:
                self._status("Workbench full!")
                return False
            if not InventoryHelper.has(self.inventory.raw, material):
                self._status(f"No {material.value} left!")
                return False
            InventoryHelper.remove(self.inventory.raw, material)
            self.workbench.slots[index] = material
            self._dirty = True
            self._status(None)
            self._bus.publish(signals.WORKBENCH_CHANGED, slots=list(self.workbench.slots))
            return True

    def remove_from_workbench(self, index: int) -> bool:
        """Return the material in one slot to the inventory."""
        with self._transaction():
            material = self.workbench.take(index)
            if material is None:
                return False
            InventoryHelper.add(self.inventory.raw, material)
            self._observe_job()
            self._dirty = True
            self._status(None)
            self._bus.publish(signals.WORKBENCH_CHANGED, slots=list(self.workbench.slots))
            return True

    def clear_workbench(self) -> None:
        """Return every workbench material to the inventory."""
        with self._transaction():
            self._status(None)
            if self.workbench.is_empty():
                return
            for material in self.workbench.take_all():
                InventoryHelper.add(self.inventory.raw, material)
            self._observe_job()
            self._dirty = True
            self._bus.publish(signals.WORKBENCH_CHANGED, slots=list(self.workbench.slots))

    # -- furnace --------------------------------------------------------

    def mix(self) -> bool:
        """Commit the workbench to the furnace if it matches a recipe."""
        with self._transaction():
            if self.furnace.state is not FurnaceState.IDLE:
                self._status("The furnace is busy!")
                return False
            recipe = detect_recipe(self.workbench.ingredients())
            if recipe is None:
                self._status("Invalid recipe!")
                return False
            self.furnace.load(recipe, self.workbench.ingredients())
            self.workbench.take_all()
            self._dirty = True
            self._status(None)
            self._bus.publish(signals.MIXED, recipe=recipe)
            self._bus.publish(signals.WORKBENCH_CHANGED, slots=list(self.workbench.slots))
            return True

    def cancel_furnace(self) -> bool:
        """Return a loaded, unfired furnace input to the inventory."""
        with self._transaction():
            if self.furnace.state is not FurnaceState.LOADED:
                if self.furnace.is_processing:
                    self._status("Too late, the furnace is already firing!")
                return False
            InventoryHelper.merge(self.inventory.raw, self.furnace.pending_input or {})
            self.furnace.reset()
            self._observe_job()
            self._dirty = True
            self._status(None)
            self._bus.publish(signals.FURNACE_CANCELLED)
            return True

    def set_temperature(self, temperature: Temperature) -> bool:
        with self._transaction():
            if self.furnace.is_processing:
                self._status("Can't change the heat while firing!")
                return False
            self.furnace.temperature = temperature
            return True

    def start_processing(self) -> bool:
        """Fire the loaded furnace if its temperature matches the recipe."""
        with self._transaction():
            recipe = self.furnace.current_recipe
            if recipe is None:
                self._status("The furnace is empty!")
                return False
            if self.furnace.is_processing:
                self._status("The furnace is already firing!")
                return False
            if recipe.temperature is not self.furnace.temperature:
                self._status(
                    f"Wrong temperature! {recipe.output.value} needs "
                    f"{recipe.temperature.value} heat."
                )
                return False
            self.furnace.ignite()
            self._status("Processing...")
            self._bus.publish(signals.PROCESSING_STARTED, recipe=recipe)
            return True

    def complete_processing(self) -> CraftedItem | None:
        """Award the crafted item and empty the furnace. No-op unless processing."""
        with self._transaction():
            return self._complete_processing()

    def _complete_processing(self) -> CraftedItem | None:
        recipe = self.furnace.current_recipe
        if recipe is None or not self.furnace.is_processing:
            return None
        item = recipe.output
        InventoryHelper.add(self.inventory.crafted, item)
        self.educational_text = recipe.educational_text
        self.last_crafted = item
        if self.board.session is not None:
            self.board.session.record_craft(item)
        self.furnace.reset()
        self._dirty = True
        self._status(f"Created {item.value}!")
        self._bus.publish(signals.CRAFTED, item=item, text=recipe.educational_text)
        return item

    # -- jobs -----------------------------------------------------------

    def generate_new_job(self) -> Job:
        """Offer a random job at the player's tier."""
        with self._transaction():
            job = random_job(self.board.tier, self._rng)
            self.board.offered = job
            self._bus.publish(signals.JOB_OFFERED, job=job)
            return job

    def job_choices(self) -> list[Job]:
        with self._transaction():
            return job_choices(
                self.board.tier,
                self.board.completed,
                self._rng,
                self._config.journeyman_threshold,
                self._config.master_threshold,
            )

    def accept_job(self, job: Job) -> bool:
        """Start tracking *job* against the current inventory."""
        with self._transaction():
            if self.board.session is not None:
                self._status("Finish or abandon your current job first!")
                return False
            self.board.accept(job, self.inventory.raw)
            self._status(f"Accepted: {job.title}")
            self._bus.publish(signals.JOB_ACCEPTED, job=job)
            return True

    def job_progress(self) -> dict[Material, int]:
        """Collected-since-acceptance count per required material."""
        with self._transaction():
            session = self.board.session
            if session is None:
                return {}
            session.observe(self.inventory.raw)
            return dict(session.collected)

    def check_job_completion(self, crafted_item: CraftedItem | None = None) -> bool:
        """Whether the accepted job is done.

        *crafted_item* is the item the furnace just produced, if any.
        """
        with self._transaction():
            session = self.board.session
            if session is None:
                return False
            session.observe(self.inventory.raw)
            session.record_craft(crafted_item)
            return session.is_complete()

    def complete_job(self) -> int | None:
        """Pay out a finished job. Returns florins paid, or None if not finished."""
        with self._transaction():
            session = self.board.session
            if session is None:
                self._status("No job accepted!")
                return None
            session.observe(self.inventory.raw)
            if not session.is_complete():
                self._status("Job requirements not met!")
                return None
            job = session.job
            streak_before = self.board.streak
            reward = self.board.complete()
            self._dirty = True
            self._status(f"Job complete! +{reward} florins")
            self._bus.publish(
                signals.JOB_COMPLETED,
                job=job,
                reward=reward,
                bonus=reward - job.reward_florins,
                streak=streak_before,
            )
            tier = self.board.promote()
            while tier is not None:
                self._bus.publish(signals.PROMOTED, tier=tier)
                tier = self.board.promote()
            return reward

    def abandon_job(self) -> Job | None:
        """Drop the accepted job and reset the streak."""
        with self._transaction():
            job = self.board.abandon()
            self._dirty = True
            self._status("Job abandoned. Streak lost!" if job is not None else None)
            self._bus.publish(signals.JOB_ABANDONED, job=job)
            return job
