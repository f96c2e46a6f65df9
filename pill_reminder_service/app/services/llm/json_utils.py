import json
from typing import Any, Dict, Type

def parse_json_object(text: str, error_cls: Type[Exception]) -> Dict[str, Any]:
    """Parse JSON even if model returns extra text around the object."""
    text = (text or "").strip()
    try:
        data = json.loads(text)
        if isinstance(data, dict):
            return data
    except ValueError:
        pass

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        try:
            data = json.loads(text[start : end + 1])
            if isinstance(data, dict):
                return data
        except ValueError:
            pass

    raise error_cls(f"Model did not return a JSON object. Got: {text[:200]}...")
