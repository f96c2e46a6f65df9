from fastapi import HTTPException, Request

from app.services.store import MedicationStore

def get_store(request: Request) -> MedicationStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Medication store not initialised.")
    return store
