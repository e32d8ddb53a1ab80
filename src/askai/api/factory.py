"""Wiring of the service from configuration."""

import logging

from fastapi import FastAPI

from ..auth import TokenIssuer
from ..chat import ChatOrchestrator, CodeAssistant, SuggestionEngine, create_suggestion_store
from ..config import ServiceConfig
from ..errors import MisconfigurationError
from ..llm import LLMProvider, create_llm_provider
from ..search import create_retrieval_aggregator
from .app import create_app

logger = logging.getLogger(__name__)


def build_llm(config: ServiceConfig) -> LLMProvider | None:
    """Create the configured completion provider.

    Returns:
        The provider, or None when its credential is missing. Requests
        that need it then fail with a 500.
    """
    try:
        return create_llm_provider(
            config.llm_provider,
            api_key=config.llm_api_key,
            model=config.llm_model,
        )
    except MisconfigurationError:
        logger.warning("%s credential missing; completion routes will return 500", config.llm_provider)
        return None


def create_app_from_config(config: ServiceConfig | None = None) -> FastAPI:
    """Build the full application from environment-derived configuration."""
    config = config or ServiceConfig.from_env()

    llm = build_llm(config)
    retrieval = create_retrieval_aggregator(
        timeout=config.search_timeout_seconds,
        import_base_url=config.template_import_base_url,
    )
    store = create_suggestion_store(
        "memory",
        max_entries=config.suggestion_store_max_entries,
        ttl_seconds=config.suggestion_store_ttl_seconds,
    )
    suggestions = SuggestionEngine(store)

    orchestrator = ChatOrchestrator(
        retrieval=retrieval,
        llm=llm,
        suggestions=suggestions,
        max_tokens=config.llm_max_tokens,
        completion_timeout=config.llm_timeout_seconds,
    )
    assistant = CodeAssistant(
        llm=llm,
        max_tokens=config.llm_max_tokens,
        completion_timeout=config.llm_timeout_seconds,
    )

    async def shutdown() -> None:
        await retrieval.close()
        if llm is not None:
            await llm.close()

    return create_app(
        token_issuer=TokenIssuer(config.jwt_secret, ttl_seconds=config.token_ttl_seconds),
        orchestrator=orchestrator,
        assistant=assistant,
        suggestions=suggestions,
        cors_origins=config.cors_origins,
        on_shutdown=shutdown,
    )
