"""LLM client abstraction using LiteLLM.

Article generation talks to whichever provider ``llm_model`` names
(deepseek, openai, anthropic, ...) through one interface.
"""

from dataclasses import dataclass
from typing import Any

import litellm
from litellm import acompletion

from trendpress.core.exceptions import ServiceError
from trendpress.core.logging import get_logger

logger = get_logger(__name__)

# Drop unsupported params for each provider
litellm.drop_params = True


@dataclass
class LLMConfig:
    """LLM configuration for a specific use case.

    Attributes:
        model: Model identifier (e.g., "deepseek/deepseek-chat")
        max_tokens: Maximum tokens in response
        temperature: Sampling temperature
        timeout: Request timeout in seconds
    """

    model: str
    max_tokens: int = 4096
    temperature: float = 0.4
    timeout: int = 120


@dataclass
class LLMResponse:
    """Standardized LLM response.

    Attributes:
        content: Generated text content
        model: Model used for generation
        usage: Token usage statistics
    """

    content: str
    model: str
    usage: dict[str, int]
    raw_response: Any = None


class LLMError(ServiceError):
    """LLM operation failed."""

    def __init__(self, message: str, model: str | None = None) -> None:
        super().__init__(message, service_name="llm", context={"model": model} if model else None)


class LLMClient:
    """Unified LLM client using LiteLLM.

    Example:
        >>> client = LLMClient(api_key="sk-...")
        >>> response = await client.complete(
        ...     config=LLMConfig(model="deepseek/deepseek-chat"),
        ...     messages=[{"role": "user", "content": "안녕하세요"}],
        ... )
        >>> print(response.content)
    """

    def __init__(self, api_key: str = "", api_base: str = "") -> None:
        """Initialize LLM client.

        Args:
            api_key: Provider API key, passed on every request when set
            api_base: Custom API base URL (OpenAI-compatible gateways)
        """
        self._api_key = api_key or None
        self._api_base = api_base or None
        logger.info("LLMClient initialized", custom_base=bool(self._api_base))

    async def complete(
        self,
        config: LLMConfig,
        messages: list[dict[str, str]],
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate completion from LLM.

        Args:
            config: LLM configuration
            messages: List of message dicts with 'role' and 'content'
            **kwargs: Additional parameters passed to the model

        Returns:
            LLMResponse with generated content

        Raises:
            LLMError: If generation fails
        """
        if self._api_key:
            kwargs.setdefault("api_key", self._api_key)
        if self._api_base:
            kwargs.setdefault("api_base", self._api_base)

        try:
            logger.debug(
                "LLM request",
                model=config.model,
                max_tokens=config.max_tokens,
                message_count=len(messages),
            )

            response = await acompletion(
                model=config.model,
                messages=messages,
                max_tokens=config.max_tokens,
                temperature=config.temperature,
                timeout=config.timeout,
                **kwargs,
            )

            content = response.choices[0].message.content or ""

            usage = {}
            if getattr(response, "usage", None):
                usage = {
                    "prompt_tokens": response.usage.prompt_tokens or 0,
                    "completion_tokens": response.usage.completion_tokens or 0,
                    "total_tokens": response.usage.total_tokens or 0,
                }

            logger.debug(
                "LLM response",
                model=response.model,
                content_length=len(content),
                usage=usage,
            )

            return LLMResponse(
                content=content,
                model=response.model or config.model,
                usage=usage,
                raw_response=response,
            )

        except Exception as e:
            logger.error("LLM request failed", model=config.model, error=str(e))
            raise LLMError(f"LLM request failed: {e}", model=config.model) from e


__all__ = [
    "LLMClient",
    "LLMConfig",
    "LLMError",
    "LLMResponse",
]
