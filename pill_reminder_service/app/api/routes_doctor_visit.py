# app/api/routes_doctor_visit.py
import logging
from fastapi import APIRouter, Depends, HTTPException
from app.agent.graph import doctor_visit_graph
from app.api.deps import get_store
from app.schemas.models import DoctorVisitRequest, DoctorVisitResponse
from app.services.hf_client import HFLLMError
from app.services.llm.doctor_visit import DoctorVisitError
from app.services.ollama_client import OllamaError
from app.services.store import MedicationStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doctor-visit", tags=["doctor-visit"])

@router.post("/prompt", response_model=DoctorVisitResponse)
def doctor_visit_prompt(req: DoctorVisitRequest, store: MedicationStore = Depends(get_store)):
    summary = store.adherence_summary()
    initial_state = {
        "medication_adherence": summary.medication_adherence,
        "observations": summary.observations,
        "health_details": req.health_details,
        "audit": [],
    }

    try:
        result = doctor_visit_graph.invoke(initial_state)
    except (DoctorVisitError, OllamaError, HFLLMError) as e:
        logger.error("Doctor visit prompt failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))

    return DoctorVisitResponse(prompt=result["prompt"], questions=result.get("questions", []))
