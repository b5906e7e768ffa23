"""
Text Generation Client - single-shot prompt -> text call to an OpenAI-compatible endpoint
"""
import logging
from typing import Optional

import openai
from openai import AsyncOpenAI

from config.settings import settings
from errors import MalformedResponse, RateLimited, UpstreamError

logger = logging.getLogger(__name__)


class TextGenerationClient:
    """
    Thin wrapper around the chat completions endpoint.

    Knows nothing about canvases or sessions and never retries: every call is
    exactly one outbound request. Provider failures are translated into
    RateLimited, UpstreamError or MalformedResponse.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.base_url = base_url if base_url is not None else settings.openai_base_url
        self.model = model or settings.openai_model
        self.temperature = temperature if temperature is not None else settings.ai_temperature
        self.max_tokens = max_tokens or settings.ai_max_output_tokens
        self.timeout = timeout or settings.ai_request_timeout_seconds
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise UpstreamError("OPENAI_API_KEY is not set. Cannot call the text generation provider.")
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    async def generate(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.RateLimitError as e:
            raise RateLimited(str(e)) from e
        except openai.APIStatusError as e:
            if e.status_code == 429:
                raise RateLimited(str(e)) from e
            raise UpstreamError(f"Provider returned status {e.status_code}: {e}") from e
        except openai.APIError as e:
            # Connection failures, timeouts and undecodable bodies
            raise UpstreamError(str(e)) from e

        choices = getattr(response, "choices", None)
        if not choices:
            raise MalformedResponse("Provider response contained no choices")

        content = choices[0].message.content if choices[0].message else None
        if not isinstance(content, str) or not content.strip():
            raise MalformedResponse("Provider response contained no text")

        return content.strip()
