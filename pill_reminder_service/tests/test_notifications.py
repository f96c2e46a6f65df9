from datetime import datetime, timedelta

from app.services.dose_status import set_status
from app.services.notifications import due_notifications
from app.services.reconcile import reconcile


AT_SEVEN = datetime(2024, 3, 15, 7, 0, 42)


def test_pending_dose_in_current_minute_is_due(amoxicillin, lisinopril):
    doses = reconcile([amoxicillin, lisinopril], [], AT_SEVEN)
    due = due_notifications(doses, [amoxicillin, lisinopril], AT_SEVEN)

    assert len(due) == 1
    assert due[0].medication_id == "amox"
    assert due[0].title == "Time to take Amoxicillin"
    assert due[0].body == "250mg scheduled for 07:00"


def test_resolved_doses_are_not_due(amoxicillin):
    doses = reconcile([amoxicillin], [], AT_SEVEN)
    doses = set_status(doses, doses[0].id, "taken")
    assert due_notifications(doses, [amoxicillin], AT_SEVEN) == []


def test_other_minutes_are_not_due(amoxicillin):
    doses = reconcile([amoxicillin], [], AT_SEVEN)
    assert due_notifications(doses, [amoxicillin], AT_SEVEN + timedelta(minutes=1)) == []
    assert due_notifications(doses, [amoxicillin], AT_SEVEN - timedelta(minutes=1)) == []


def test_doses_of_unknown_medication_are_ignored(amoxicillin):
    doses = reconcile([amoxicillin], [], AT_SEVEN)
    assert due_notifications(doses, [], AT_SEVEN) == []


def test_store_notifies_once_per_minute(store, clock):
    store.request_permission(True)
    clock.now = datetime(2024, 3, 15, 9, 0, 5)  # seed Metformin at 09:00

    first = store.notify_due()
    clock.now = datetime(2024, 3, 15, 9, 0, 35)
    second = store.notify_due()

    assert [n.title for n in first] == ["Time to take Metformin"]
    assert second == []
    assert len(store.outbox.list()) == 1


def test_store_does_not_deliver_without_permission(store, clock):
    clock.now = datetime(2024, 3, 15, 9, 0)
    assert store.permission == "default"
    assert store.notify_due() == []

    store.request_permission(False)
    clock.now = datetime(2024, 3, 15, 15, 0)
    assert store.permission == "denied"
    assert store.notify_due() == []
    assert store.outbox.list() == []
    assert all(d.status == "pending" for d in store.doses() if d.scheduled_time.hour in (9, 15))


def test_permission_granted_later_in_the_same_minute(store, clock):
    clock.now = datetime(2024, 3, 15, 15, 0, 5)
    assert store.notify_due() == []

    store.request_permission(True)
    clock.now = datetime(2024, 3, 15, 15, 0, 40)
    assert [n.title for n in store.notify_due()] == ["Time to take Amoxicillin"]


def test_late_tick_catches_up_skipped_minute(store, clock):
    store.request_permission(True)
    clock.now = datetime(2024, 3, 15, 14, 59, 40)
    assert store.notify_due() == []

    clock.now = datetime(2024, 3, 15, 15, 1, 10)  # the 15:00 tick never came
    assert [n.title for n in store.notify_due()] == ["Time to take Amoxicillin"]
    assert store.notify_due() == []


def test_catch_up_is_bounded(store, clock):
    store.request_permission(True)
    clock.now = datetime(2024, 3, 15, 14, 50)
    store.notify_due()

    clock.now = datetime(2024, 3, 15, 15, 6)
    assert store.notify_due() == []


def test_since_covers_minutes_between_ticks(amoxicillin):
    doses = reconcile([amoxicillin], [], AT_SEVEN)
    later = datetime(2024, 3, 15, 7, 2, 3)
    assert due_notifications(doses, [amoxicillin], later) == []
    due = due_notifications(doses, [amoxicillin], later, since=datetime(2024, 3, 15, 6, 59))
    assert [n.body for n in due] == ["250mg scheduled for 07:00"]
