"""Article generation from keywords and their news context."""

from trendpress.services.generator.article import LLMArticleGenerator, generate_slug
from trendpress.services.generator.base import GeneratedArticle
from trendpress.services.generator.fallback import compose_fallback_article

__all__ = [
    "GeneratedArticle",
    "LLMArticleGenerator",
    "compose_fallback_article",
    "generate_slug",
]
