# app/services/notifications.py
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from app.schemas.models import Dose, Medication, NotificationPayload
from app.utils.timeparse import format_hhmm, minute_floor

def build_payload(dose: Dose, med: Medication) -> NotificationPayload:
    return NotificationPayload(
        dose_id=dose.id,
        medication_id=med.id,
        title=f"Time to take {med.name}",
        body=f"{med.dosage} scheduled for {format_hhmm(dose.scheduled_time)}",
        scheduled_time=dose.scheduled_time,
    )

def due_notifications(
    doses: Iterable[Dose],
    medications: Iterable[Medication],
    now: datetime,
    since: Optional[datetime] = None,
) -> List[NotificationPayload]:
    """
    Pending doses whose scheduled minute equals the current minute, paired with
    their medication. Doses of deleted medications are ignored.

    With `since`, every minute in (since, now] is covered, so a tick that
    arrives late still picks up the minutes it jumped over. Pure; the caller
    keeps track of which minutes were already evaluated.
    """
    by_id: Dict[str, Medication] = {m.id: m for m in medications}
    current = minute_floor(now)
    lower = minute_floor(since) if since is not None and since < current else current - timedelta(minutes=1)

    out: List[NotificationPayload] = []
    for d in doses:
        if d.status != "pending":
            continue
        if not (lower < minute_floor(d.scheduled_time) <= current):
            continue
        med = by_id.get(d.medication_id)
        if med is None:
            continue
        out.append(build_payload(d, med))
    return out
