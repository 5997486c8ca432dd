import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from careersync.config import AIConfig
from careersync.errors import ModelUnavailable

logger = logging.getLogger("careersync.llm")


class ModelClient:
    """Chat-completion client for an OpenAI-compatible endpoint (OpenRouter by default)."""

    def __init__(self, config: AIConfig):
        self.config = config
        self._client: Optional[OpenAI] = None

    def get_client(self) -> OpenAI:
        if self._client is None:
            if not self.config.api_key:
                raise ModelUnavailable("No API key configured for the AI service.")
            self._client = OpenAI(
                base_url=self.config.base_url,
                api_key=self.config.api_key,
                timeout=self.config.timeout_seconds,
                max_retries=0,
                default_headers={
                    "HTTP-Referer": self.config.site_url,
                    "X-Title": self.config.app_title,
                },
            )
        return self._client

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        client = self.get_client()
        try:
            completion = client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.config.temperature if temperature is None else temperature,
                max_tokens=self.config.max_tokens if max_tokens is None else max_tokens,
            )
        except OpenAIError as exc:
            logger.warning("AI service error: %s", exc)
            raise ModelUnavailable(f"AI service error: {exc}") from exc

        if not completion.choices:
            raise ModelUnavailable("AI service returned no choices.")
        return completion.choices[0].message.content or ""
