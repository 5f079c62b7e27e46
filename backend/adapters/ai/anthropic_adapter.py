"""
Anthropic Claude adapter for AI content generation.

Every call is made with the requesting user's own API key, so a client is
built per request rather than once per process.
"""

import logging
from dataclasses import dataclass

import anthropic

from core.exceptions import UpstreamGenerationFailed
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class GeneratedText:
    """Generated text result."""

    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0


class AnthropicContentService:
    """AI content generation service using Anthropic Claude."""

    def __init__(
        self,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ):
        self._model = model or settings.generation_model
        self._temperature = settings.generation_temperature if temperature is None else temperature
        self._max_tokens = max_tokens or settings.generation_max_tokens
        self._timeout = timeout or settings.generation_timeout_seconds

    @property
    def model(self) -> str:
        return self._model

    def _client(self, api_key: str) -> anthropic.AsyncAnthropic:
        # SDK retries disabled: a failed call is reported, never repeated
        return anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=self._timeout,
            max_retries=0,
        )

    async def generate_text(self, prompt: str, api_key: str) -> GeneratedText:
        """
        Generate text from a prompt.

        Args:
            prompt: Fully assembled user prompt
            api_key: The caller's provider API key

        Returns:
            GeneratedText with the concatenated text blocks

        Raises:
            UpstreamGenerationFailed: on any provider error, timeout or an
                empty response. The provider's own message is logged, not
                returned.
        """
        client = self._client(api_key)
        try:
            message = await client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APITimeoutError as e:
            logger.error("Generation request timed out after %ss", self._timeout)
            raise UpstreamGenerationFailed() from e
        except anthropic.APIStatusError as e:
            logger.error("Generation provider returned HTTP %s: %s", e.status_code, e.message)
            raise UpstreamGenerationFailed() from e
        except anthropic.APIError as e:
            logger.error("Generation provider error: %s", e)
            raise UpstreamGenerationFailed() from e
        finally:
            await client.close()

        response_text = "".join(
            getattr(block, "text", "") for block in (message.content or [])
        ).strip()
        if not response_text:
            logger.error("Generation provider returned an empty response (stop_reason=%s)", message.stop_reason)
            raise UpstreamGenerationFailed()

        if message.stop_reason == "max_tokens":
            logger.warning("Generated text truncated at max_tokens=%d", self._max_tokens)

        usage = getattr(message, "usage", None)
        logger.debug("Generated text response (%d chars)", len(response_text))
        return GeneratedText(
            content=response_text,
            model=getattr(message, "model", None) or self._model,
            input_tokens=getattr(usage, "input_tokens", 0) or 0,
            output_tokens=getattr(usage, "output_tokens", 0) or 0,
        )


# Singleton instance
content_ai_service = AnthropicContentService()


def get_content_ai_service() -> AnthropicContentService:
    """FastAPI dependency returning the generation provider (overridden in tests)."""
    return content_ai_service
