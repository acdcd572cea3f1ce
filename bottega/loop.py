"""WorkshopLoop - paced host loop driving CraftingEconomy.tick."""
from __future__ import annotations

import threading
import time
from typing import Callable

from bottega.economy import CraftingEconomy

Hook = Callable[[CraftingEconomy], None]


class WorkshopLoop:
    def __init__(self, economy: CraftingEconomy, tps: int = 20) -> None:
        self._economy = economy
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._dt = 1.0 / tps
        self._tick_count = 0
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested = threading.Event()

    @property
    def economy(self) -> CraftingEconomy:
        return self._economy

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def tick_count(self) -> int:
        """Ticks driven since construction."""
        return self._tick_count

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def stop(self) -> None:
        """Ask a running loop to exit after the current tick. Safe from any thread."""
        self._stop_requested.set()

    def _tick(self) -> None:
        self._tick_count += 1
        self._economy.tick(self._dt)

    def step(self) -> None:
        self._tick()

    def run(self, n: int) -> None:
        self._stop_requested.clear()
        for hook in self._start_hooks:
            hook(self._economy)

        for _ in range(n):
            self._tick()
            if self._stop_requested.is_set():
                break

        for hook in self._stop_hooks:
            hook(self._economy)

    def run_forever(self) -> None:
        self._stop_requested.clear()
        for hook in self._start_hooks:
            hook(self._economy)

        dt = self._dt
        while not self._stop_requested.is_set():
            start = time.monotonic()
            self._tick()
            elapsed = time.monotonic() - start
            sleep_time = dt - elapsed
            if sleep_time > 0:
                self._stop_requested.wait(sleep_time)

        for hook in self._stop_hooks:
            hook(self._economy)

    def start_background(self) -> threading.Thread:
        """Run ``run_forever`` on a daemon thread and return it."""
        thread = threading.Thread(target=self.run_forever, name="workshop-loop", daemon=True)
        thread.start()
        return thread
