"""Infrastructure layer components.

Shared HTTP and LLM clients that services receive through the container.
"""

from trendpress.infrastructure.http_client import HTTPClient
from trendpress.infrastructure.llm import LLMClient, LLMConfig, LLMError, LLMResponse

__all__ = ["HTTPClient", "LLMClient", "LLMConfig", "LLMError", "LLMResponse"]
