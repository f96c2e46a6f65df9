from fastapi import APIRouter, Depends
from app.api.deps import get_store
from app.schemas.models import AdherenceStats, AdherenceSummaryText
from app.services.store import MedicationStore

router = APIRouter(prefix="/adherence", tags=["adherence"])

@router.get("", response_model=AdherenceStats)
def adherence(store: MedicationStore = Depends(get_store)):
    return store.adherence()

@router.get("/summary", response_model=AdherenceSummaryText)
def summary(store: MedicationStore = Depends(get_store)):
    return store.adherence_summary()
