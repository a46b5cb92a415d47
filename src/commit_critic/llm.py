import logging
import time

import openai
from openai import AsyncOpenAI

from .config import Config
from .errors import ConfigError, GatewayError

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 10000


def get_openrouter_client(config: Config) -> AsyncOpenAI:
    if not config.api_key:
        raise ConfigError("OPENROUTER_API_KEY environment variable is not set.")

    return AsyncOpenAI(
        base_url=config.base_url,
        api_key=config.api_key,
    )


class CompletionGateway:
    """Text-in/text-out boundary to the chat completion service.

    One request per call, no retries and no interpretation of the reply;
    the response format belongs to the parsing module.
    """

    def __init__(self, client: AsyncOpenAI, model: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> None:
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    @classmethod
    def from_config(cls, config: Config) -> "CompletionGateway":
        return cls(get_openrouter_client(config), config.model)

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send one request and return the raw reply text.

        Raises:
            GatewayError: the service is unreachable, answers with an error
                status, or returns no content.
        """
        t0 = time.perf_counter()
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except openai.OpenAIError as e:
            raise GatewayError(f"Error calling AI API: {e}") from e

        dt_ms = (time.perf_counter() - t0) * 1000.0
        logger.debug("llm_call model=%s latency_ms=%.1f", self.model, dt_ms)

        if not resp.choices:
            raise GatewayError("AI API returned no choices")
        text = resp.choices[0].message.content
        if text is None or not text.strip():
            raise GatewayError("AI API returned empty content")
        return text
