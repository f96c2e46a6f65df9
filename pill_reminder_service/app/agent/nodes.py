# app/agent/nodes.py
import logging
from typing import Any, Dict

from app.agent.state import DoctorVisitState
from app.services.llm.doctor_visit import DoctorVisitError, llm_doctor_visit
from app.services.llm.prompts import render_doctor_visit_prompt
from app.services.llm.sanitize import sanitize_doctor_visit_output

logger = logging.getLogger(__name__)

def _audit(state: DoctorVisitState, event: str, extra: Dict[str, Any] | None = None) -> Dict[str, Any]:
    audit = list(state.get("audit") or [])
    audit.append({"event": event, **(extra or {})})
    return {"audit": audit}

def compose_node(state: DoctorVisitState) -> Dict[str, Any]:
    health_details = (state.get("health_details") or "").strip()
    user_prompt = render_doctor_visit_prompt(
        medication_adherence=state.get("medication_adherence") or "",
        observations=state.get("observations") or "",
        health_details=health_details,
    )
    return {
        "health_details": health_details,
        "user_prompt": user_prompt,
        **_audit(state, "compose.done", {"chars": len(user_prompt)}),
    }

def generate_node(state: DoctorVisitState) -> Dict[str, Any]:
    raw = llm_doctor_visit(state["user_prompt"])
    return {"raw": raw, **_audit(state, "generate.done")}

def format_node(state: DoctorVisitState) -> Dict[str, Any]:
    out = sanitize_doctor_visit_output(state.get("raw") or {})
    if not out["prompt"]:
        logger.warning("Doctor visit generation returned an empty prompt")
        raise DoctorVisitError("Failed to generate prompt. The result was empty.")
    return {**out, **_audit(state, "format.done", {"questions": len(out["questions"])})}
