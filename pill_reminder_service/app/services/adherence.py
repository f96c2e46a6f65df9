from datetime import datetime
from typing import Iterable, List

from app.schemas.models import AdherenceStats, Dose, Medication
from app.utils.timeparse import is_same_day

def compute_adherence(doses: Iterable[Dose], now: datetime) -> AdherenceStats:
    """
    Today's counts. `pending` counts every pending dose of the day; taken and
    skipped only count elapsed doses. No history reads as 100%.
    """
    today = [d for d in doses if is_same_day(d.scheduled_time, now)]
    elapsed = [d for d in today if d.scheduled_time <= now]

    taken = sum(1 for d in elapsed if d.status == "taken")
    skipped = sum(1 for d in elapsed if d.status == "skipped")
    pending = sum(1 for d in today if d.status == "pending")

    resolved = taken + skipped
    # round half up, matching Math.round for positive values
    rate = int(taken * 100 / resolved + 0.5) if resolved else 100

    return AdherenceStats(taken=taken, skipped=skipped, pending=pending, adherence_rate=rate)

def adherence_summary_text(stats: AdherenceStats) -> str:
    return (
        f"Adherence rate: {stats.adherence_rate}%. "
        f"Taken: {stats.taken} doses, Skipped: {stats.skipped} doses."
    )

def observation_lines(meds: Iterable[Medication]) -> str:
    lines: List[str] = [f"- {m.name}: {m.observations or ''}".rstrip() for m in meds]
    return "\n".join(lines)
