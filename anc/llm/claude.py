"""Claude (Anthropic) LLM Client"""

from anc.llm.base import LLMClient, LLMError


class ClaudeClient(LLMClient):
    """Claude API client. Requires an API key (ANTHROPIC_API_KEY or config)."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"

    def __init__(self, api_key: str, model: str | None = None, temperature: float = 1.0):
        super().__init__(api_key, model, temperature)

        if not self.api_key:
            raise LLMError(
                "No API key found. Set ANTHROPIC_API_KEY or run:\n"
                "  anc --set-key sk-ant-..."
            )

        try:
            from anthropic import Anthropic
            self._client = Anthropic(api_key=self.api_key)
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )

    @property
    def name(self) -> str:
        return "Claude"

    def _request(self, system_prompt: str, user_text: str) -> str | None:
        from anthropic import APIError, AuthenticationError

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                # Anthropic accepts 0.0-1.0
                temperature=min(max(self.temperature, 0.0), 1.0),
                system=system_prompt,
                messages=[{"role": "user", "content": user_text}]
            )
        except AuthenticationError:
            raise LLMError("failed to generate commit message: invalid API key")
        except APIError as e:
            raise LLMError(f"failed to generate commit message: {e.message}")

        for block in response.content:
            if block.type == "text":
                return block.text
        return None
