"""
LLM client factory and response text extraction tests
"""

import httpx
import pytest
from langchain_core.messages import AIMessage, AIMessageChunk

from support_dispatch.config.settings import settings
from support_dispatch.llm.client import create_llm, ollama_model_available
from support_dispatch.llm.response_utils import extract_text_from_response


def test_unknown_provider(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "bogus")
    with pytest.raises(ValueError, match="Unsupported LLM provider"):
        create_llm()


def test_groq_requires_key(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "groq")
    monkeypatch.setattr(settings, "groq_api_key", "")
    with pytest.raises(ValueError, match="GROQ_API_KEY"):
        create_llm()


def test_groq_uses_openai_compatible_endpoint(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "groq")
    monkeypatch.setattr(settings, "groq_api_key", "gsk_test_key_123456")

    llm = create_llm(temperature=0, max_completion_tokens=10)

    assert llm.openai_api_base == settings.groq_base_url
    assert llm.model_name == settings.groq_model
    assert llm.temperature == 0


def _tags_response(models):
    request = httpx.Request("GET", f"{settings.ollama_base_url}/api/tags")
    return httpx.Response(200, json={"models": models}, request=request)


def test_ollama_model_check(monkeypatch):
    monkeypatch.setattr(httpx, "get", lambda *a, **kw: _tags_response([{"name": "llama3:latest"}]))
    assert ollama_model_available("llama3") is True
    assert ollama_model_available("mistral") is False


def test_ollama_unreachable(monkeypatch):
    def refuse(*args, **kwargs):
        raise httpx.ConnectError("connection refused")

    monkeypatch.setattr(httpx, "get", refuse)
    assert ollama_model_available("llama3") is False


def test_extract_text_variants():
    assert extract_text_from_response(AIMessage(content="billing")) == "billing"
    assert extract_text_from_response(AIMessageChunk(content="")) == ""
    assert extract_text_from_response("plain") == "plain"
    assert extract_text_from_response(AIMessage(content=[
        {"type": "reasoning", "text": "The user asks about an invoice"},
        {"type": "text", "text": "billing"},
    ])) == "billing"
