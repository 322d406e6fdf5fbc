"""OpenAI Chat Completions Client"""

from anc.llm.base import LLMClient, LLMError


class OpenAIClient(LLMClient):
    """OpenAI API client. Requires an API key (OPENAI_API_KEY or config)."""

    DEFAULT_MODEL = "o4-mini"

    def __init__(self, api_key: str, model: str | None = None, temperature: float = 1.0):
        super().__init__(api_key, model, temperature)

        if not self.api_key:
            raise LLMError(
                "No API key found. Set OPENAI_API_KEY or run:\n"
                "  anc --set-key sk-..."
            )

        try:
            from openai import OpenAI
            self._client = OpenAI(api_key=self.api_key)
        except ImportError:
            raise LLMError(
                "OpenAI SDK not installed. Run:\n"
                "  pip install openai"
            )

    @property
    def name(self) -> str:
        return "OpenAI"

    def _request(self, system_prompt: str, user_text: str) -> str | None:
        from openai import OpenAIError, AuthenticationError

        try:
            response = self._client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_text},
                ],
            )
        except AuthenticationError:
            raise LLMError("failed to generate commit message: invalid API key")
        except OpenAIError as e:
            raise LLMError(f"failed to generate commit message: {e}")

        if not response.choices:
            return None
        return response.choices[0].message.content or ""
