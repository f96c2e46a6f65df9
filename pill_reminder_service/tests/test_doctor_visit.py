import pytest
from fastapi.testclient import TestClient

from app.agent import nodes
from app.agent.graph import doctor_visit_graph
from app.main import create_app
from app.services import hf_client, ollama_client
from app.services.llm import doctor_visit
from app.services.llm.doctor_visit import DoctorVisitError, llm_doctor_visit
from app.services.llm.prompts import render_doctor_visit_prompt
from app.services.llm.sanitize import extract_questions, sanitize_doctor_visit_output
from app.services.hf_client import HFLLMError
from app.services.ollama_client import OllamaError

LLM_TEXT = "Here are some questions:\n- How is your sleep?\n2. Any dizziness after Lisinopril?\nThanks"


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store, enable_ticker=False))


def test_extract_questions_strips_markers():
    assert extract_questions(LLM_TEXT) == ["How is your sleep?", "Any dizziness after Lisinopril?"]


def test_sanitize_handles_missing_prompt():
    assert sanitize_doctor_visit_output({"prompt": None}) == {"prompt": "", "questions": []}


def test_template_fills_all_fields():
    text = render_doctor_visit_prompt("Adherence rate: 75%.", "- A: none", "headaches")
    assert "Medication Adherence: Adherence rate: 75%." in text
    assert "Observations: - A: none" in text
    assert "Health Details: headaches" in text


def test_unknown_provider():
    with pytest.raises(DoctorVisitError):
        llm_doctor_visit("hi", provider="nope")


def test_graph_runs_compose_generate_format(monkeypatch):
    seen = {}

    def fake_llm(user_prompt):
        seen["prompt"] = user_prompt
        return {"prompt": LLM_TEXT}

    monkeypatch.setattr(nodes, "llm_doctor_visit", fake_llm)
    result = doctor_visit_graph.invoke({
        "medication_adherence": "Adherence rate: 100%.",
        "observations": "- A:",
        "health_details": "  tired  ",
        "audit": [],
    })

    assert "Health Details: tired" in seen["prompt"]
    assert result["questions"] == ["How is your sleep?", "Any dizziness after Lisinopril?"]
    assert [a["event"] for a in result["audit"]] == ["compose.done", "generate.done", "format.done"]


def test_endpoint_returns_questions(client, monkeypatch):
    seen = {}

    def fake_llm(user_prompt):
        seen["prompt"] = user_prompt
        return {"prompt": LLM_TEXT}

    monkeypatch.setattr(nodes, "llm_doctor_visit", fake_llm)
    r = client.post("/doctor-visit/prompt", json={"health_details": "new rash"})

    assert r.status_code == 200
    assert r.json()["questions"] == ["How is your sleep?", "Any dizziness after Lisinopril?"]
    assert "Adherence rate: 100%. Taken: 0 doses, Skipped: 0 doses." in seen["prompt"]
    assert "- Amoxicillin: Avoid dairy for 1 hour after taking." in seen["prompt"]


def test_endpoint_empty_result_is_502(client, monkeypatch):
    monkeypatch.setattr(nodes, "llm_doctor_visit", lambda user_prompt: {"prompt": "  "})
    r = client.post("/doctor-visit/prompt", json={"health_details": ""})
    assert r.status_code == 502
    assert "empty" in r.json()["detail"]


def test_endpoint_llm_failure_is_502(client, monkeypatch):
    def boom(user_prompt):
        raise OllamaError("Ollama unreachable")

    monkeypatch.setattr(nodes, "llm_doctor_visit", boom)
    assert client.post("/doctor-visit/prompt", json={}).status_code == 502


class _TimingOutInferenceClient:
    def __init__(self, **kwargs):
        pass

    def chat_completion(self, **kwargs):
        raise TimeoutError("read timed out")


class _HtmlResponse:
    status_code = 200
    text = "<html>gateway</html>"

    def json(self):
        raise ValueError("Expecting value")


def test_hf_transport_error_is_wrapped(monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "hf_test")
    monkeypatch.setattr(hf_client, "InferenceClient", _TimingOutInferenceClient)
    with pytest.raises(HFLLMError):
        llm_doctor_visit("hi", provider="hf")


def test_ollama_non_json_body_is_wrapped(monkeypatch):
    monkeypatch.setattr(ollama_client.requests, "post", lambda *args, **kwargs: _HtmlResponse())
    with pytest.raises(OllamaError):
        llm_doctor_visit("hi", provider="ollama")


def test_endpoint_hf_timeout_is_502(client, monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "hf_test")
    monkeypatch.setattr(doctor_visit, "LLM_PROVIDER", "hf")
    monkeypatch.setattr(hf_client, "InferenceClient", _TimingOutInferenceClient)

    r = client.post("/doctor-visit/prompt", json={"health_details": "dizzy"})
    assert r.status_code == 502
    assert "read timed out" in r.json()["detail"]


def test_endpoint_ollama_non_json_is_502(client, monkeypatch):
    monkeypatch.setattr(doctor_visit, "LLM_PROVIDER", "ollama")
    monkeypatch.setattr(ollama_client.requests, "post", lambda *args, **kwargs: _HtmlResponse())
    assert client.post("/doctor-visit/prompt", json={}).status_code == 502
