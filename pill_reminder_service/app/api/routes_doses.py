from typing import List
from fastapi import APIRouter, Depends
from app.api.deps import get_store
from app.schemas.models import Dose, DoseStatusUpdate
from app.services.store import MedicationStore

router = APIRouter(prefix="/doses", tags=["doses"])

@router.get("/today", response_model=List[Dose])
def today(store: MedicationStore = Depends(get_store)):
    return store.today_doses()

@router.post("/{dose_id}/status", response_model=List[Dose])
def mark(dose_id: str, req: DoseStatusUpdate, store: MedicationStore = Depends(get_store)):
    # unknown dose ids are a no-op: the unchanged list comes back
    store.update_dose_status(dose_id, req.status)
    return store.today_doses()
