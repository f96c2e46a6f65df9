# app/services/reconcile.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List

from app.schemas.models import Dose, Medication
from app.services.scheduling import generate_doses_for_day
from app.utils.timeparse import is_same_day

def reconcile(
    medications: Iterable[Medication],
    previous_doses: Iterable[Dose],
    now: datetime,
) -> List[Dose]:
    """
    Today's authoritative dose list.

    Freshly generated slots are merged with previously recorded doses by id:
    a stored record for today wins over the fresh `pending` slot, so recorded
    statuses survive recomputation. Stored doses from other days, or whose slot
    no longer exists, are dropped. Order follows medication order, then time.
    """
    kept: Dict[str, Dose] = {
        d.id: d for d in previous_doses if is_same_day(d.scheduled_time, now)
    }
    fresh = generate_doses_for_day(medications, now)
    return [kept.get(d.id, d) for d in fresh]

def remove_doses_for(doses: Iterable[Dose], medication_id: str) -> List[Dose]:
    return [d for d in doses if d.medication_id != medication_id]

def auto_skip_elapsed(doses: Iterable[Dose], now: datetime) -> List[Dose]:
    """Resolve pending doses scheduled strictly before `now` to skipped."""
    out: List[Dose] = []
    for d in doses:
        if d.status == "pending" and d.scheduled_time < now:
            out.append(d.model_copy(update={"status": "skipped"}))
        else:
            out.append(d)
    return out

def sort_chronological(doses: Iterable[Dose]) -> List[Dose]:
    return sorted(doses, key=lambda d: (d.scheduled_time, d.medication_id))

def same_doses(a: List[Dose], b: List[Dose]) -> bool:
    """Equal by (id, status) in order."""
    return [(d.id, d.status) for d in a] == [(d.id, d.status) for d in b]
