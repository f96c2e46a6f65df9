import uuid
from datetime import datetime, timedelta
from typing import Iterable, List

from app.schemas.models import Dose, Medication, MedicationCreate
from app.utils.timeparse import day_window, epoch_ms, parse_hhmm

def new_medication_id() -> str:
    return "med_" + uuid.uuid4().hex[:10]

def build_medication(data: MedicationCreate) -> Medication:
    return Medication(id=new_medication_id(), **data.model_dump())

def dose_id(medication_id: str, scheduled_time: datetime) -> str:
    # same medication + same instant -> same id, so recomputation is idempotent
    return f"{medication_id}-{epoch_ms(scheduled_time)}"

def generate_doses(med: Medication, window_start: datetime, window_end: datetime) -> List[Dose]:
    """
    Dose instances for one medication inside [window_start, window_end] (inclusive).

    Anchors on window_start's date at the medication's start_time and steps by
    `frequency` hours. An anchor that falls before window_start is not emitted.
    """
    hh, mm = parse_hhmm(med.start_time)
    step = timedelta(hours=med.frequency)

    doses: List[Dose] = []
    current = window_start.replace(hour=hh, minute=mm, second=0, microsecond=0)
    while current <= window_end:
        if current >= window_start:
            doses.append(Dose(
                id=dose_id(med.id, current),
                medication_id=med.id,
                scheduled_time=current,
                status="pending",
            ))
        current = current + step
    return doses

def generate_doses_for_day(meds: Iterable[Medication], day: datetime) -> List[Dose]:
    start, end = day_window(day)
    out: List[Dose] = []
    for m in meds:
        out.extend(generate_doses(m, start, end))
    return out
