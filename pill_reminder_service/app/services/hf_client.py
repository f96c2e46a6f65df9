import os
from typing import Any, Dict, Optional

from huggingface_hub import InferenceClient

from app.core.llm_config import (
    HF_TEMPERATURE,
    HF_MAX_TOKENS,
    HF_TIMEOUT_S,
)
from app.services.llm.json_utils import parse_json_object

class HFLLMError(RuntimeError):
    pass

def hf_chat_json(
    *,
    model: str,
    system: str,
    user: str,
    schema: Optional[Dict[str, Any]] = None,
    schema_name: str = "DoctorVisitPrompt",
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    timeout_s: Optional[int] = None,
) -> Dict[str, Any]:
    # read token + provider at runtime so config.env edits apply without re-import
    token = os.getenv("HF_TOKEN", "").strip()
    if not token:
        raise HFLLMError("HF_TOKEN is missing. Set it in config.env and restart.")

    provider = os.getenv("HF_PROVIDER", "auto").strip() or "auto"

    client = InferenceClient(
        provider=provider,
        api_key=token,
        timeout=float(timeout_s or HF_TIMEOUT_S),
    )

    messages = [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]

    if schema:
        response_format = {
            "type": "json_schema",
            "json_schema": {"name": schema_name, "schema": schema, "strict": True},
        }
    else:
        response_format = {"type": "json_object"}

    try:
        out = client.chat_completion(
            model=model,
            messages=messages,
            temperature=temperature if temperature is not None else HF_TEMPERATURE,
            max_tokens=max_tokens if max_tokens is not None else HF_MAX_TOKENS,
            response_format=response_format,
        )
    except Exception as e:
        raise HFLLMError(f"HF chat_completion failed for {model}: {e}") from e

    content = out.choices[0].message.content or ""
    return parse_json_object(content, HFLLMError)
