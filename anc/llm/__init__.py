"""LLM Client Package"""

from anc.config import Config
from anc.llm.base import LLMClient, LLMError, build_user_message
from anc.llm.claude import ClaudeClient
from anc.llm.openai_chat import OpenAIClient

PROVIDERS = {
    "openai": OpenAIClient,
    "claude": ClaudeClient,
}


def get_client(config: Config) -> LLMClient:
    """Build the client for the configured provider."""
    client_class = PROVIDERS.get(config.provider)
    if client_class is None:
        raise LLMError(f"Unknown provider: {config.provider}. Use 'openai' or 'claude'.")
    return client_class(api_key=config.api_key, model=config.model or None, temperature=config.temperature)


__all__ = [
    "LLMClient",
    "LLMError",
    "OpenAIClient",
    "ClaudeClient",
    "get_client",
    "build_user_message",
    "PROVIDERS",
]
