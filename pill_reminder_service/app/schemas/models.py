from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from app.utils.timeparse import parse_hhmm

Frequency = Literal[8, 12, 24]
DoseStatus = Literal["pending", "taken", "skipped"]
UserDoseStatus = Literal["taken", "skipped"]
PermissionState = Literal["default", "granted", "denied"]

SAFETY_NOTE = (
    "Not medical advice. This service reminds you of user-provided medicines. "
    "Always confirm instructions with a doctor/pharmacist."
)

class MedicationCreate(BaseModel):
    name: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1)
    frequency: Frequency = Field(24, description="Hours between doses: 8, 12 or 24")
    start_time: str = Field("08:00", description="First dose of the day, HH:MM 24-hour")
    observations: Optional[str] = None

    @field_validator("name", "dosage")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("start_time")
    @classmethod
    def _valid_start_time(cls, v: str) -> str:
        h, m = parse_hhmm(v)
        return f"{h:02d}:{m:02d}"

class Medication(MedicationCreate):
    id: str

class Dose(BaseModel):
    id: str
    medication_id: str
    scheduled_time: datetime
    status: DoseStatus = "pending"

    @field_validator("scheduled_time")
    @classmethod
    def _naive_local(cls, v: datetime) -> datetime:
        # stored "...Z" / offset timestamps become local wall-clock time
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

class DoseStatusUpdate(BaseModel):
    status: UserDoseStatus

class AdherenceStats(BaseModel):
    taken: int
    skipped: int
    pending: int
    adherence_rate: int

class AdherenceSummaryText(BaseModel):
    medication_adherence: str
    observations: str
    stats: AdherenceStats

class NotificationPayload(BaseModel):
    dose_id: str
    medication_id: str
    title: str
    body: str
    scheduled_time: datetime

class PermissionRequest(BaseModel):
    granted: bool

class PermissionResponse(BaseModel):
    permission: PermissionState

class ToolResult(BaseModel):
    ok: bool
    mock: bool = True
    details: Dict[str, Any] = Field(default_factory=dict)

class DoctorVisitRequest(BaseModel):
    health_details: str = ""

class DoctorVisitResponse(BaseModel):
    prompt: str
    questions: List[str] = []
    safety_note: str = SAFETY_NOTE
