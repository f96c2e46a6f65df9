# app/services/llm/doctor_visit.py
from typing import Any, Dict, Optional

from app.core.llm_config import LLM_PROVIDER, HF_MODEL_DOCTOR, OLLAMA_MODEL_DOCTOR
from app.services.hf_client import hf_chat_json
from app.services.ollama_client import ollama_chat_json
from app.services.llm.prompts import DOCTOR_VISIT_SYSTEM_PROMPT
from app.services.llm.schemas import DOCTOR_VISIT_SCHEMA

class DoctorVisitError(RuntimeError):
    pass

def llm_doctor_visit(user_prompt: str, provider: Optional[str] = None) -> Dict[str, Any]:
    """Raw `{"prompt": ...}` dict from the configured provider."""
    provider = provider or LLM_PROVIDER
    if provider == "hf":
        return hf_chat_json(
            model=HF_MODEL_DOCTOR,
            system=DOCTOR_VISIT_SYSTEM_PROMPT,
            user=user_prompt,
            schema=DOCTOR_VISIT_SCHEMA,
        )
    if provider == "ollama":
        return ollama_chat_json(
            model=OLLAMA_MODEL_DOCTOR,
            system=DOCTOR_VISIT_SYSTEM_PROMPT,
            user=user_prompt,
            schema=DOCTOR_VISIT_SCHEMA,
        )
    raise DoctorVisitError(f"Unknown LLM_PROVIDER {provider!r} (expected 'ollama' or 'hf')")
