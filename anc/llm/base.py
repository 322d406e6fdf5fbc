"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod


def build_user_message(diff: str, context: str = "") -> str:
    """Combine a diff with optional free-text context."""
    if context:
        return f"Context: {context}\n\nDiff:\n{diff}"
    return diff


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients.

    A client makes exactly one request per call. There is no retry and no
    streaming; any failure raises LLMError.
    """

    DEFAULT_MODEL = ""
    MAX_TOKENS = 1000

    def __init__(self, api_key: str, model: str | None = None, temperature: float = 1.0):
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.temperature = temperature

    @abstractmethod
    def _request(self, system_prompt: str, user_text: str) -> str | None:
        """Send one request and return the first choice, or None if there was none."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def complete(self, system_prompt: str, user_text: str) -> str:
        if not user_text:
            raise LLMError("empty diff provided")
        content = self._request(system_prompt, user_text)
        if content is None:
            raise LLMError(f"no response from {self.name}")
        return content
