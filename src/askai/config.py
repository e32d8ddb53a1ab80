"""Service configuration.

Centralizes environment-driven settings and logging setup.
"""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Search providers
SEARCH_TIMEOUT_SECONDS = 5.0
DOCS_RESULT_LIMIT = 3
FORUM_RESULT_LIMIT = 3
TEMPLATE_RESULT_LIMIT = 5
TEMPLATE_ENRICH_LIMIT = 3
TEMPLATE_ENRICH_TIMEOUT_SECONDS = 1.5
# Share of a source's timeout the template search may spend before enrichment is skipped
TEMPLATE_SEARCH_BUDGET_SHARE = 0.8

# Template rendering
TEMPLATE_DISPLAY_LIMIT = 3
TEMPLATE_SUMMARY_MAX_LENGTH = 160

# Tokens
TOKEN_TTL_SECONDS = 600

DEFAULT_TEMPLATE_IMPORT_BASE_URL = "https://automation.whitelabel.lat/templates"
DEFAULT_ANTHROPIC_MODEL = "claude-3-5-sonnet-20241022"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    return float(value) if value else None


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value else None


class ServiceConfig(BaseModel):
    """Runtime configuration for the assistant service."""

    jwt_secret: str = Field(default="dev-secret", description="Shared token signing secret")
    token_ttl_seconds: int = Field(default=TOKEN_TTL_SECONDS, ge=1)

    llm_provider: str = Field(default="anthropic", description="anthropic, openai or deepseek")
    llm_api_key: str = Field(default="", description="Credential for the selected provider")
    llm_model: str | None = Field(default=None, description="Model override (None = provider default)")
    llm_max_tokens: int = Field(default=1024, ge=1)
    llm_timeout_seconds: float | None = Field(
        default=None,
        description="Bound on a completion call (None = unbounded)"
    )

    search_timeout_seconds: float = Field(default=SEARCH_TIMEOUT_SECONDS, gt=0)
    template_import_base_url: str = DEFAULT_TEMPLATE_IMPORT_BASE_URL

    suggestion_store_max_entries: int | None = Field(default=None, ge=1)
    suggestion_store_ttl_seconds: float | None = Field(default=None, gt=0)

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "ServiceConfig":
        """Build configuration from environment variables.

        Environment variables:
            JWT_SECRET, TOKEN_TTL_SECONDS
            LLM_PROVIDER (anthropic, openai, deepseek; default: anthropic)
            N8N_AI_ANTHROPIC_KEY / ANTHROPIC_API_KEY, ANTHROPIC_MODEL
            OPENAI_API_KEY, OPENAI_CHAT_MODEL
            DEEPSEEK_API_KEY, DEEPSEEK_MODEL
            LLM_MAX_TOKENS, LLM_TIMEOUT_SECONDS
            SEARCH_TIMEOUT_SECONDS, TEMPLATE_IMPORT_BASE_URL
            SUGGESTION_STORE_MAX_ENTRIES, SUGGESTION_STORE_TTL_SECONDS
            HOST, PORT, LOG_LEVEL, CORS_ORIGINS (comma separated)
        """
        if load_env_file:
            load_dotenv()

        provider = os.getenv("LLM_PROVIDER", "anthropic").lower()
        if provider in ("anthropic", "claude"):
            api_key = os.getenv("N8N_AI_ANTHROPIC_KEY") or os.getenv("ANTHROPIC_API_KEY", "")
            model = os.getenv("ANTHROPIC_MODEL", DEFAULT_ANTHROPIC_MODEL)
        elif provider == "openai":
            api_key = os.getenv("OPENAI_API_KEY", "")
            model = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")
        elif provider == "deepseek":
            api_key = os.getenv("DEEPSEEK_API_KEY", "")
            model = os.getenv("DEEPSEEK_MODEL", "deepseek-chat")
        else:
            raise ValueError(
                f"Unsupported LLM_PROVIDER: {provider}. "
                f"Supported providers: 'anthropic', 'openai', 'deepseek'"
            )

        origins = os.getenv("CORS_ORIGINS", "*")

        return cls(
            jwt_secret=os.getenv("JWT_SECRET", "dev-secret"),
            token_ttl_seconds=int(os.getenv("TOKEN_TTL_SECONDS", str(TOKEN_TTL_SECONDS))),
            llm_provider=provider,
            llm_api_key=api_key,
            llm_model=model,
            llm_max_tokens=int(os.getenv("LLM_MAX_TOKENS", "1024")),
            llm_timeout_seconds=_optional_float("LLM_TIMEOUT_SECONDS"),
            search_timeout_seconds=float(
                os.getenv("SEARCH_TIMEOUT_SECONDS", str(SEARCH_TIMEOUT_SECONDS))
            ),
            template_import_base_url=os.getenv(
                "TEMPLATE_IMPORT_BASE_URL", DEFAULT_TEMPLATE_IMPORT_BASE_URL
            ),
            suggestion_store_max_entries=_optional_int("SUGGESTION_STORE_MAX_ENTRIES"),
            suggestion_store_ttl_seconds=_optional_float("SUGGESTION_STORE_TTL_SECONDS"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8080")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
