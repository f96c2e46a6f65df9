# app/services/store.py
import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from app.schemas.models import (
    AdherenceStats,
    AdherenceSummaryText,
    Dose,
    Medication,
    MedicationCreate,
    NotificationPayload,
    PermissionState,
    UserDoseStatus,
)
from app.services.adherence import adherence_summary_text, compute_adherence, observation_lines
from app.services.dose_status import set_status
from app.services.notifications import due_notifications
from app.services.persistence import PersistenceAdapter
from app.services.reconcile import (
    auto_skip_elapsed,
    reconcile,
    remove_doses_for,
    same_doses,
    sort_chronological,
)
from app.services.scheduling import build_medication
from app.services.tools import NotificationOutbox
from app.utils.timeparse import minute_floor

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

MAX_CATCH_UP = timedelta(minutes=5)

class MedicationStore:
    """
    Owns the medication registry and today's dose list.

    Every mutation runs as read-modify-write under one lock and is persisted
    right after; a failed save keeps the in-memory change.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        clock: Clock = datetime.now,
        auto_skip: bool = False,
        outbox: Optional[NotificationOutbox] = None,
    ):
        self.adapter = adapter
        self.clock = clock
        self.auto_skip = auto_skip
        self.outbox = outbox or NotificationOutbox()

        self._lock = threading.RLock()
        self._medications: List[Medication] = []
        self._doses: List[Dose] = []
        self._permission: PermissionState = "default"
        self._last_notified_minute: Optional[datetime] = None

    # ---------------------------
    # internals
    # ---------------------------
    def _recompute(self, now: datetime) -> List[Dose]:
        doses = reconcile(self._medications, self._doses, now)
        if self.auto_skip:
            # doses inside the notification catch-up window stay pending
            doses = auto_skip_elapsed(doses, minute_floor(now) - MAX_CATCH_UP)
        return doses

    def _save(self) -> bool:
        ok = self.adapter.save(self._medications, self._doses)
        if not ok:
            logger.warning("State change kept in memory only (save failed)")
        return ok

    # ---------------------------
    # lifecycle
    # ---------------------------
    def load(self) -> None:
        meds, doses = self.adapter.load()
        with self._lock:
            self._medications = meds
            self._doses = doses
            self._doses = self._recompute(self.clock())
            self._save()
        logger.info("Loaded %d medication(s), %d dose(s) today", len(meds), len(self._doses))

    def refresh(self) -> bool:
        """Re-reconcile against the clock (day rollover). Returns True if the list changed."""
        with self._lock:
            updated = self._recompute(self.clock())
            if same_doses(updated, self._doses):
                return False
            self._doses = updated
            self._save()
            return True

    # ---------------------------
    # reads
    # ---------------------------
    def medications(self) -> List[Medication]:
        with self._lock:
            return list(self._medications)

    def doses(self) -> List[Dose]:
        with self._lock:
            return list(self._doses)

    def today_doses(self) -> List[Dose]:
        now = self.clock()
        with self._lock:
            return sort_chronological(d for d in self._doses if d.scheduled_time.date() == now.date())

    def adherence(self) -> AdherenceStats:
        return compute_adherence(self.doses(), self.clock())

    def adherence_summary(self) -> AdherenceSummaryText:
        stats = self.adherence()
        return AdherenceSummaryText(
            medication_adherence=adherence_summary_text(stats),
            observations=observation_lines(self.medications()),
            stats=stats,
        )

    # ---------------------------
    # mutations
    # ---------------------------
    def add_medication(self, data: MedicationCreate) -> Medication:
        med = build_medication(data)
        with self._lock:
            self._medications = self._medications + [med]
            self._doses = self._recompute(self.clock())
            self._save()
        logger.info("Added medication %s (%s)", med.id, med.name)
        return med

    def delete_medication(self, medication_id: str) -> bool:
        with self._lock:
            if not any(m.id == medication_id for m in self._medications):
                return False
            self._medications = [m for m in self._medications if m.id != medication_id]
            self._doses = remove_doses_for(self._doses, medication_id)
            self._save()
        logger.info("Deleted medication %s", medication_id)
        return True

    def update_dose_status(self, dose_id: str, status: UserDoseStatus) -> List[Dose]:
        with self._lock:
            updated = set_status(self._doses, dose_id, status)
            if same_doses(updated, self._doses):
                return list(self._doses)
            self._doses = updated
            self._save()
            return list(self._doses)

    # ---------------------------
    # notifications
    # ---------------------------
    @property
    def permission(self) -> PermissionState:
        return self._permission

    def request_permission(self, granted: bool) -> PermissionState:
        self._permission = "granted" if granted else "denied"
        return self._permission

    def notify_due(self) -> List[NotificationPayload]:
        """
        Fire notifications for the current minute, at most once per minute.

        Minutes skipped by a late tick are caught up, back to MAX_CATCH_UP.
        Nothing is consumed while permission is not granted.
        """
        if self._permission != "granted":
            return []

        now = self.clock()
        minute = minute_floor(now)
        with self._lock:
            last = self._last_notified_minute
            if last is not None and last >= minute:
                return []
            since = last if last is not None and minute - last <= MAX_CATCH_UP else None
            self._last_notified_minute = minute
            due = due_notifications(self._doses, self._medications, now, since=since)

        for payload in due:
            result = self.outbox.deliver(payload)
            logger.info("Notification %s for dose %s (ok=%s)", payload.title, payload.dose_id, result.ok)
        return due
