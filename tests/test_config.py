"""Tests for configuration, prompts, wiring and the CLI."""
import pytest
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from askai.api import create_app_from_config
from askai.api.factory import build_llm
from askai.auth import TokenIssuer
from askai.cli import app as cli_app
from askai.config import DEFAULT_ANTHROPIC_MODEL, ServiceConfig
from askai.llm import AnthropicProvider, DeepSeekProvider
from askai.prompts import clear_cache, get_ask_ai_system_prompt, get_chat_system_prompt, load_prompt

_ENV_VARS = [
    "JWT_SECRET", "TOKEN_TTL_SECONDS", "LLM_PROVIDER", "N8N_AI_ANTHROPIC_KEY",
    "ANTHROPIC_API_KEY", "ANTHROPIC_MODEL", "OPENAI_API_KEY", "DEEPSEEK_API_KEY",
    "LLM_TIMEOUT_SECONDS", "SUGGESTION_STORE_MAX_ENTRIES", "CORS_ORIGINS", "PORT",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove service variables from the environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestServiceConfig:
    """Tests for ServiceConfig.from_env."""

    def test_defaults(self, clean_env):
        config = ServiceConfig.from_env(load_env_file=False)

        assert config.llm_provider == "anthropic"
        assert config.llm_model == DEFAULT_ANTHROPIC_MODEL
        assert config.llm_api_key == ""
        assert config.token_ttl_seconds == 600
        assert config.llm_timeout_seconds is None
        assert config.suggestion_store_max_entries is None
        assert config.cors_origins == ["*"]

    def test_anthropic_key_precedence(self, clean_env):
        """Test that the service-specific key wins over the generic one."""
        clean_env.setenv("ANTHROPIC_API_KEY", "generic")
        clean_env.setenv("N8N_AI_ANTHROPIC_KEY", "specific")

        assert ServiceConfig.from_env(load_env_file=False).llm_api_key == "specific"

    def test_overrides(self, clean_env):
        clean_env.setenv("LLM_PROVIDER", "DeepSeek")
        clean_env.setenv("DEEPSEEK_API_KEY", "ds-key")
        clean_env.setenv("LLM_TIMEOUT_SECONDS", "12.5")
        clean_env.setenv("SUGGESTION_STORE_MAX_ENTRIES", "100")
        clean_env.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
        clean_env.setenv("PORT", "9000")

        config = ServiceConfig.from_env(load_env_file=False)

        assert config.llm_provider == "deepseek"
        assert config.llm_api_key == "ds-key"
        assert config.llm_timeout_seconds == 12.5
        assert config.suggestion_store_max_entries == 100
        assert config.cors_origins == ["https://a.example", "https://b.example"]
        assert config.port == 9000

    def test_unknown_provider(self, clean_env):
        clean_env.setenv("LLM_PROVIDER", "gemini")

        with pytest.raises(ValueError, match="Unsupported LLM_PROVIDER"):
            ServiceConfig.from_env(load_env_file=False)


class TestWiring:
    """Tests for building the application from configuration."""

    def test_build_llm_without_key(self):
        assert build_llm(ServiceConfig(llm_api_key="")) is None

    def test_build_llm_selects_provider(self):
        assert isinstance(build_llm(ServiceConfig(llm_api_key="k")), AnthropicProvider)
        assert isinstance(
            build_llm(ServiceConfig(llm_provider="deepseek", llm_api_key="k")),
            DeepSeekProvider,
        )

    def test_app_serves_without_key(self):
        """Test that a missing credential only affects completion routes."""
        config = ServiceConfig(jwt_secret="s3cret", llm_api_key="")

        with TestClient(create_app_from_config(config)) as client:
            assert client.get("/healthz").json() == {"ok": True}
            token = client.post("/auth/token", json={"licenseCert": "c"}).json()["accessToken"]
            response = client.post(
                "/ask-ai",
                json={"question": "hola"},
                headers={"Authorization": f"Bearer {token}"},
            )

        assert response.status_code == 500


class TestPrompts:
    """Tests for prompt loading."""

    def test_packaged_prompts(self):
        clear_cache()

        assert "n8n" in get_chat_system_prompt()
        assert "JavaScript" in get_ask_ai_system_prompt()

    def test_working_directory_override(self, tmp_path, monkeypatch):
        """Test that ./prompts/<name>.txt takes precedence."""
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "chat_system.txt").write_text("  custom prompt\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        clear_cache()
        try:
            assert get_chat_system_prompt() == "custom prompt"
        finally:
            clear_cache()

    def test_missing_prompt(self):
        with pytest.raises(FileNotFoundError):
            load_prompt("does_not_exist")


class TestCLI:
    """Tests for the command-line interface."""

    def test_token_command(self, clean_env):
        clean_env.setenv("JWT_SECRET", "cli-secret")

        result = CliRunner().invoke(cli_app, ["token", "cert-9"])

        assert result.exit_code == 0
        claims = TokenIssuer("cli-secret").verify(result.output.strip())
        assert claims.license_cert == "cert-9"

    def test_config_command_masks_secrets(self, clean_env):
        clean_env.setenv("JWT_SECRET", "very-secret-value")

        result = CliRunner().invoke(cli_app, ["config"])

        assert result.exit_code == 0
        assert "very-secret-value" not in result.output
        assert "****" in result.output
