import logging
from typing import Any, Dict, Optional

import requests

from app.core.llm_config import (
    OLLAMA_BASE_URL,
    OLLAMA_TEMPERATURE,
    OLLAMA_TIMEOUT_S,
)
from app.services.llm.json_utils import parse_json_object

logger = logging.getLogger(__name__)

class OllamaError(RuntimeError):
    pass

def ollama_chat_json(
    model: str,
    system: str,
    user: str,
    schema: Optional[Dict[str, Any]] = None,
    temperature: Optional[float] = None,
    timeout_s: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Calls Ollama /api/chat and returns JSON from assistant message content.
    `format` carries the JSON schema when one is given.
    """
    url = f"{OLLAMA_BASE_URL}/chat"
    payload: Dict[str, Any] = {
        "model": model,
        "messages": [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
        "stream": False,
        "options": {"temperature": temperature if temperature is not None else OLLAMA_TEMPERATURE},
    }
    if schema is not None:
        payload["format"] = schema

    try:
        r = requests.post(url, json=payload, timeout=timeout_s or OLLAMA_TIMEOUT_S)
    except requests.RequestException as e:
        raise OllamaError(f"Ollama unreachable at {url}: {e}") from e

    if r.status_code >= 400:
        raise OllamaError(f"Ollama {r.status_code}: {r.text}")

    try:
        data = r.json()
    except ValueError as e:
        raise OllamaError(f"Ollama returned a non-JSON body: {r.text[:200]}") from e
    if not isinstance(data, dict):
        raise OllamaError(f"Unexpected Ollama response: {r.text[:200]}")

    content = (data.get("message") or {}).get("content", "")
    logger.debug("ollama model=%s returned %d chars", model, len(content))
    return parse_json_object(content, OllamaError)
