# app/services/llm/schemas.py

DOCTOR_VISIT_SCHEMA = {
    "type": "object",
    "properties": {
        "prompt": {
            "type": "string",
            "description": "Questions for the doctor visit, one per line, each starting with '- ' or 'N. '",
        },
    },
    "required": ["prompt"],
}
