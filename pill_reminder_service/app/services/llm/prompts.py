# app/services/llm/prompts.py

DOCTOR_VISIT_SYSTEM_PROMPT = (
    "You help a patient prepare for a doctor visit.\n"
    "Strict safety rules:\n"
    "- Do NOT diagnose, prescribe, or change any medication.\n"
    "- Only suggest questions the patient can ask; no answers.\n"
    "- Base every question on the provided adherence, observations and health details.\n"
    "- Output ONLY valid JSON matching the schema: {\"prompt\": string}.\n"
)

DOCTOR_VISIT_TEMPLATE = (
    "Here's a summary of the patient's medication adherence, observations, and important "
    "health details. Use this information to guide the clinical conversation with the patient.\n"
    "\n"
    "Medication Adherence: {medication_adherence}\n"
    "\n"
    "Observations: {observations}\n"
    "\n"
    "Health Details: {health_details}\n"
    "\n"
    "Based on this information, what questions should I ask the patient to best understand "
    "their current health status and medication needs? Please format your response as a list "
    "of questions."
)

def render_doctor_visit_prompt(medication_adherence: str, observations: str, health_details: str) -> str:
    return DOCTOR_VISIT_TEMPLATE.format(
        medication_adherence=medication_adherence,
        observations=observations,
        health_details=health_details,
    )
