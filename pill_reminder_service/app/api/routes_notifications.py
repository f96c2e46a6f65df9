from typing import Any, Dict, List
from fastapi import APIRouter, Depends
from app.api.deps import get_store
from app.schemas.models import NotificationPayload, PermissionRequest, PermissionResponse
from app.services.store import MedicationStore

router = APIRouter(prefix="/notifications", tags=["notifications"])

@router.get("/permission", response_model=PermissionResponse)
def get_permission(store: MedicationStore = Depends(get_store)):
    return PermissionResponse(permission=store.permission)

@router.post("/permission", response_model=PermissionResponse)
def request_permission(req: PermissionRequest, store: MedicationStore = Depends(get_store)):
    return PermissionResponse(permission=store.request_permission(req.granted))

@router.get("")
def outbox(store: MedicationStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return store.outbox.list()

@router.post("/check", response_model=List[NotificationPayload])
def check(store: MedicationStore = Depends(get_store)):
    return store.notify_due()
