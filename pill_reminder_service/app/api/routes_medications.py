from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response
from app.api.deps import get_store
from app.schemas.models import Medication, MedicationCreate
from app.services.store import MedicationStore

router = APIRouter(prefix="/medications", tags=["medications"])

@router.get("", response_model=List[Medication])
def list_medications(store: MedicationStore = Depends(get_store)):
    return store.medications()

@router.post("", response_model=Medication, status_code=201)
def add_medication(req: MedicationCreate, store: MedicationStore = Depends(get_store)):
    return store.add_medication(req)

@router.delete("/{medication_id}", status_code=204)
def delete_medication(medication_id: str, store: MedicationStore = Depends(get_store)):
    if not store.delete_medication(medication_id):
        raise HTTPException(status_code=404, detail="medication_id not found")
    return Response(status_code=204)
