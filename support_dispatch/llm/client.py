"""
LLM client factory

Creates appropriate LLM instances based on provider configuration.
"""

from typing import Optional
from loguru import logger

from support_dispatch.config.settings import settings


def _mask(key: str) -> str:
    return key[:8] + "..." + key[-4:] if len(key) > 12 else "***"


def ollama_model_available(model: str) -> bool:
    """
    Ask the Ollama server whether a model is pulled.

    Only logs when the server cannot be reached; generation will surface the error.
    """
    import httpx

    try:
        response = httpx.get(f"{settings.ollama_base_url}/api/tags", timeout=3.0)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning(f"Could not reach Ollama at {settings.ollama_base_url} to check model '{model}': {e}")
        return False

    available = {m.get("name", "").split(":")[0] for m in response.json().get("models", [])}
    if model.split(":")[0] not in available:
        logger.error(f"Ollama model '{model}' is not pulled. Run: ollama pull {model}")
        return False
    return True


def create_llm(temperature: Optional[float] = None, max_completion_tokens: Optional[int] = None, model: Optional[str] = None):
    """
    Factory function to create appropriate LLM based on provider configuration.

    Args:
        temperature: Generation temperature (defaults to settings.llm_temperature)
        max_completion_tokens: Max tokens for completion (defaults to settings.max_output_tokens)
        model: Model name (defaults to provider-specific model)

    Returns:
        LangChain ChatModel instance (ChatOpenAI or ChatOllama)
    """
    provider = settings.llm_provider.lower()
    max_tokens = max_completion_tokens or settings.max_output_tokens
    temperature = temperature if temperature is not None else settings.llm_temperature

    if provider == "groq":
        from langchain_openai import ChatOpenAI

        if not settings.groq_api_key:
            raise ValueError("GROQ_API_KEY is required when LLM_PROVIDER=groq")

        logger.debug(f"LLM Provider: Groq | Model: {model or settings.groq_model} | API key: {_mask(settings.groq_api_key)}")
        return ChatOpenAI(
            model=model or settings.groq_model,
            base_url=settings.groq_base_url,
            api_key=settings.groq_api_key,
            temperature=temperature,
            max_completion_tokens=max_tokens,
        )

    elif provider == "openai":
        from langchain_openai import ChatOpenAI

        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY is required when LLM_PROVIDER=openai")

        logger.debug(f"LLM Provider: OpenAI | Model: {model or settings.openai_model} | API key: {_mask(settings.openai_api_key)}")
        return ChatOpenAI(
            model=model or settings.openai_model,
            api_key=settings.openai_api_key,
            temperature=temperature,
            max_completion_tokens=max_tokens,
        )

    elif provider == "ollama":
        from langchain_community.chat_models import ChatOllama

        logger.debug(f"LLM Provider: Ollama | Base URL: {settings.ollama_base_url} | Model: {model or settings.ollama_model}")
        ollama_model_available(model or settings.ollama_model)
        return ChatOllama(
            model=model or settings.ollama_model,
            base_url=settings.ollama_base_url,
            temperature=temperature,
            num_predict=max_tokens,  # Ollama uses num_predict instead of max_completion_tokens
        )

    else:
        raise ValueError(f"Unsupported LLM provider: {provider}. Supported: 'groq', 'openai', 'ollama'")
