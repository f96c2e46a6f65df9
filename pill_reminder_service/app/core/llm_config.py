import os

from app.core.env import load_env

load_env()

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "ollama").lower().strip()

OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434/api")
OLLAMA_MODEL_DOCTOR = os.getenv("OLLAMA_MODEL_DOCTOR", "llama3.2")
OLLAMA_TEMPERATURE = float(os.getenv("OLLAMA_TEMPERATURE", "0.2"))
OLLAMA_TIMEOUT_S = int(os.getenv("OLLAMA_TIMEOUT_S", "90"))

HF_MODEL_DOCTOR = os.getenv("HF_MODEL_DOCTOR", "meta-llama/Llama-3.1-8B-Instruct")
HF_TEMPERATURE = float(os.getenv("HF_TEMPERATURE", "0.2"))
HF_MAX_TOKENS = int(os.getenv("HF_MAX_TOKENS", "1024"))
HF_TIMEOUT_S = int(os.getenv("HF_TIMEOUT_S", "90"))
