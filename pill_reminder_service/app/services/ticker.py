"""Timer that drives periodic reconciliation and notification checks.

Runs a daemon thread; each tick calls `store.refresh()` then `store.notify_due()`.
"""
import logging
from threading import Event, Thread
from typing import Optional

from app.services.store import MedicationStore

logger = logging.getLogger(__name__)

class MinuteTicker:
    def __init__(self, store: MedicationStore, poll_interval: float = 60.0):
        self.store = store
        self.poll_interval = poll_interval
        self._stop = Event()
        self._thread: Optional[Thread] = None

    @property
    def running(self) -> bool:
        return bool(self._thread and self._thread.is_alive())

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = Thread(target=self._run, name="pill-reminder-ticker", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=2.0)
        self._thread = None

    def tick(self) -> None:
        try:
            self.store.refresh()
        except Exception:
            logger.exception("Scheduled refresh failed")
        try:
            self.store.notify_due()
        except Exception:
            logger.exception("Notification check failed")

    def _run(self) -> None:
        while not self._stop.is_set():
            self.tick()
            self._stop.wait(self.poll_interval)
