from datetime import datetime, timedelta

from app.schemas.models import Dose, Medication
from app.services.adherence import adherence_summary_text, compute_adherence, observation_lines


def _dose(i: int, when: datetime, status: str) -> Dose:
    return Dose(id=f"m-{i}", medication_id="m", scheduled_time=when, status=status)


def test_no_elapsed_doses_reads_as_perfect_adherence(now):
    stats = compute_adherence([], now)
    assert (stats.taken, stats.skipped, stats.pending, stats.adherence_rate) == (0, 0, 0, 100)


def test_rate_is_rounded_percentage(now):
    past = now - timedelta(hours=1)
    doses = [_dose(i, past, "taken") for i in range(3)] + [_dose(3, past, "skipped")]
    stats = compute_adherence(doses, now)
    assert stats.taken == 3 and stats.skipped == 1
    assert stats.adherence_rate == 75


def test_rate_rounds_half_up(now):
    past = now - timedelta(hours=1)
    doses = [_dose(0, past, "taken")] + [_dose(i, past, "skipped") for i in range(1, 8)]
    assert compute_adherence(doses, now).adherence_rate == 13


def test_future_resolutions_are_not_counted(now):
    doses = [_dose(0, now + timedelta(hours=2), "taken"), _dose(1, now, "skipped")]
    stats = compute_adherence(doses, now)
    assert stats.taken == 0
    assert stats.skipped == 1
    assert stats.adherence_rate == 0


def test_pending_counts_all_of_today_regardless_of_time(now):
    doses = [
        _dose(0, now - timedelta(hours=3), "pending"),
        _dose(1, now + timedelta(hours=3), "pending"),
        _dose(2, now - timedelta(days=1), "pending"),
    ]
    assert compute_adherence(doses, now).pending == 2


def test_other_days_are_ignored(now):
    doses = [_dose(0, now - timedelta(days=1), "skipped")]
    stats = compute_adherence(doses, now)
    assert stats.skipped == 0 and stats.adherence_rate == 100


def test_compute_adherence_is_pure(now):
    doses = [_dose(0, now - timedelta(hours=1), "taken"), _dose(1, now + timedelta(hours=1), "pending")]
    snapshot = list(doses)
    assert compute_adherence(doses, now) == compute_adherence(doses, now)
    assert doses == snapshot


def test_summary_text(now):
    past = now - timedelta(hours=1)
    stats = compute_adherence([_dose(0, past, "taken"), _dose(1, past, "skipped")], now)
    assert adherence_summary_text(stats) == "Adherence rate: 50%. Taken: 1 doses, Skipped: 1 doses."


def test_observation_lines(lisinopril):
    other = Medication(id="x", name="Metformin", dosage="500mg", frequency=12, start_time="09:00")
    assert observation_lines([lisinopril, other]) == "- Lisinopril: Take on a full stomach.\n- Metformin:"
