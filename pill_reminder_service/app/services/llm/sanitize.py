# app/services/llm/sanitize.py
import re
from typing import Any, Dict, List

_LIST_ITEM_RE = re.compile(r"^(?:-|\d+\.)\s*")
_NUMBERED_RE = re.compile(r"^\d+\.\s")

def extract_questions(prompt: str) -> List[str]:
    """List items ("- ..." or "1. ...") of the generated text, markers stripped."""
    questions: List[str] = []
    for line in (prompt or "").splitlines():
        line = line.strip()
        if not (line.startswith("- ") or _NUMBERED_RE.match(line)):
            continue
        q = _LIST_ITEM_RE.sub("", line, count=1).strip()
        if q:
            questions.append(q)
    return questions

def sanitize_doctor_visit_output(raw: Dict[str, Any]) -> Dict[str, Any]:
    prompt = raw.get("prompt")
    if not isinstance(prompt, str):
        prompt = ""
    prompt = prompt.strip()
    return {"prompt": prompt, "questions": extract_questions(prompt)}
