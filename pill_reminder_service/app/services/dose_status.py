from typing import List

from app.schemas.models import Dose, UserDoseStatus

_USER_STATUSES = ("taken", "skipped")

def set_status(doses: List[Dose], dose_id: str, new_status: UserDoseStatus) -> List[Dose]:
    """
    Return a new list where the dose with `dose_id` carries `new_status`.
    Unknown ids leave the list unchanged. Only user statuses are accepted;
    "pending" is assigned by the scheduler alone.
    """
    if new_status not in _USER_STATUSES:
        raise ValueError(f"status must be one of {_USER_STATUSES}, got {new_status!r}")
    return [
        d.model_copy(update={"status": new_status}) if d.id == dose_id else d
        for d in doses
    ]
