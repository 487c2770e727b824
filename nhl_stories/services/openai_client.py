"""
OpenAI client for story generation.

Thin async wrapper around the chat completions API exposing a single
``complete(prompt)`` call. Failures are raised to the caller, which owns
the fallback decision.
"""

from __future__ import annotations

import httpx
from openai import AsyncOpenAI

from ..config import Settings
from ..logging import logger


class CompletionClient:
    """Async OpenAI client for story bodies.

    The SDK's built-in retries are disabled: one failed request goes
    straight to the caller's templated fallback.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        client: AsyncOpenAI | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not api_key:
            raise ValueError("OpenAI API key not configured")
        self.model = model
        self.client = client or AsyncOpenAI(
            api_key=api_key,
            max_retries=0,
            http_client=http_client,
        )

    async def complete(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        """Generate text for ``prompt``.

        Raises:
            ValueError: If the service returns no content.
            openai.OpenAIError: On any API failure.
        """
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=temperature,
        )

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise ValueError("OpenAI returned empty response")

        logger.debug("openai_completion", model=self.model, chars=len(content))
        return content.strip()


def get_completion_client(settings: Settings) -> CompletionClient | None:
    """Get a completion client if an API key is configured, else None."""
    if not settings.openai_api_key:
        logger.warning("openai_not_configured", detail="AI generation disabled")
        return None
    return CompletionClient(api_key=settings.openai_api_key, model=settings.openai_model)
