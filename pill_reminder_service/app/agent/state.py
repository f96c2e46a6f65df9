from typing import Any, Dict, List, TypedDict

class DoctorVisitState(TypedDict, total=False):
    # inputs
    medication_adherence: str
    observations: str
    health_details: str

    # intermediate
    user_prompt: str
    raw: Dict[str, Any]  # provider output, unsanitized

    # outputs
    prompt: str
    questions: List[str]
    audit: List[Dict[str, Any]]
