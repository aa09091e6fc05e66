"""Dependency Injection Container.

This module provides a centralized DI container using dependency-injector.
Lifecycles:
- Singleton: one instance per process (engine, clients, stores, pipeline)
- Factory: new instance on every call

The pipeline is a Singleton so its rate window and run lock are shared by
the scheduler and the HTTP trigger within one process.

Usage:
    # In FastAPI
    from trendpress.core.container import get_container

    pipeline = get_container().pipeline()
    result = await pipeline.run_once()

    # In tests
    with container.services.news_fetcher.override(fake_news):
        ...
"""

from dependency_injector import containers, providers

from trendpress.config.filtering import QualityFilterConfig
from trendpress.config.news import GeneratorConfig, NewsConfig
from trendpress.config.pipeline import PipelineConfig
from trendpress.core.config import Config, get_config
from trendpress.core.database import create_engine, create_session_factory


class InfrastructureContainer(containers.DeclarativeContainer):
    """Infrastructure layer dependencies (database, external clients)."""

    global_config = providers.Dependency(instance_of=Config)

    # ============================================
    # Database
    # ============================================

    db_engine = providers.Singleton(create_engine, config=global_config)

    db_session_factory = providers.Singleton(create_session_factory, engine=db_engine)

    # ============================================
    # External clients
    # ============================================

    http_client = providers.Singleton(
        "trendpress.infrastructure.http_client.HTTPClient",
        timeout=global_config.provided.news_timeout_seconds,
    )

    llm_client = providers.Singleton(
        "trendpress.infrastructure.llm.LLMClient",
        api_key=global_config.provided.llm_api_key,
        api_base=global_config.provided.llm_api_base,
    )


class ConfigContainer(containers.DeclarativeContainer):
    """Typed Pydantic config models built from the environment config."""

    global_config = providers.Dependency(instance_of=Config)

    quality_filter_config = providers.Singleton(
        QualityFilterConfig.from_settings, config=global_config
    )

    pipeline_config = providers.Singleton(PipelineConfig.from_settings, config=global_config)

    news_config = providers.Singleton(NewsConfig.from_settings, config=global_config)

    generator_config = providers.Singleton(GeneratorConfig.from_settings, config=global_config)


class ServiceContainer(containers.DeclarativeContainer):
    """Service layer dependencies."""

    global_config = providers.Dependency(instance_of=Config)
    infrastructure = providers.DependenciesContainer()
    configs = providers.DependenciesContainer()

    # ============================================
    # Storage
    # ============================================

    keyword_store = providers.Singleton(
        "trendpress.services.storage.keyword_store.SQLKeywordStore",
        session_factory=infrastructure.db_session_factory,
    )

    article_store = providers.Singleton(
        "trendpress.services.storage.article_store.SQLArticleStore",
        session_factory=infrastructure.db_session_factory,
    )

    # ============================================
    # Collector
    # ============================================

    sources = providers.Singleton(
        "trendpress.services.collector.sources.factory.create_sources",
        source_names=global_config.provided.enabled_sources,
        http_client=infrastructure.http_client,
    )

    keyword_normalizer = providers.Factory(
        "trendpress.services.collector.normalizer.KeywordNormalizer",
    )

    keyword_classifier = providers.Singleton(
        "trendpress.services.collector.classifier.KeywordClassifier",
        config=configs.quality_filter_config,
    )

    # ============================================
    # Content
    # ============================================

    news_fetcher = providers.Singleton(
        "trendpress.services.news.fetcher.NewsFetcher",
        http_client=infrastructure.http_client,
        config=configs.news_config,
    )

    article_generator = providers.Singleton(
        "trendpress.services.generator.article.LLMArticleGenerator",
        llm_client=infrastructure.llm_client,
        config=configs.generator_config,
    )

    publisher = providers.Singleton(
        "trendpress.services.publisher.json_publisher.JSONPublisher",
        output_dir=global_config.provided.output_dir,
        site_title=global_config.provided.site_title,
        site_url=global_config.provided.site_url,
    )

    # ============================================
    # Pipeline
    # ============================================

    pipeline = providers.Singleton(
        "trendpress.services.pipeline.orchestrator.TrendPipeline",
        sources=sources,
        classifier=keyword_classifier,
        keyword_store=keyword_store,
        article_store=article_store,
        news_provider=news_fetcher,
        article_generator=article_generator,
        publisher=publisher,
        config=configs.pipeline_config,
        normalizer=keyword_normalizer,
    )

    scheduler = providers.Singleton(
        "trendpress.workers.scheduler.TrendScheduler",
        pipeline=pipeline,
        interval_minutes=global_config.provided.crawl_interval_minutes,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Root application container.

    Composes all sub-containers and provides the main entry point.
    """

    # Uses get_config() to ensure same instance across the app
    config = providers.Singleton(get_config)

    infrastructure = providers.Container(
        InfrastructureContainer,
        global_config=config,
    )

    configs = providers.Container(
        ConfigContainer,
        global_config=config,
    )

    services = providers.Container(
        ServiceContainer,
        global_config=config,
        infrastructure=infrastructure,
        configs=configs,
    )

    # ============================================
    # Convenience accessors (shortcuts)
    # ============================================

    db_engine = providers.Singleton(
        lambda engine: engine,
        engine=infrastructure.db_engine,
    )

    http_client = providers.Singleton(
        lambda client: client,
        client=infrastructure.http_client,
    )

    keyword_store = providers.Singleton(
        lambda svc: svc,
        svc=services.keyword_store,
    )

    article_store = providers.Singleton(
        lambda svc: svc,
        svc=services.article_store,
    )

    pipeline = providers.Singleton(
        lambda svc: svc,
        svc=services.pipeline,
    )

    scheduler = providers.Singleton(
        lambda svc: svc,
        svc=services.scheduler,
    )


def create_container(config: Config | None = None) -> ApplicationContainer:
    """Create and configure the application container.

    Args:
        config: Config to use instead of the environment singleton

    Returns:
        Configured ApplicationContainer instance
    """
    container = ApplicationContainer()
    if config is not None:
        container.config.override(config)
    return container


_container: ApplicationContainer | None = None


def get_container() -> ApplicationContainer:
    """Get the process-wide container, creating it on first use."""
    global _container
    if _container is None:
        _container = create_container()
    return _container


__all__ = [
    "ApplicationContainer",
    "ConfigContainer",
    "InfrastructureContainer",
    "ServiceContainer",
    "create_container",
    "get_container",
]
