"""Pytest configuration and shared fixtures."""
import asyncio
from typing import Any

import pytest
from fastapi.testclient import TestClient

from askai.api import create_app
from askai.auth import TokenIssuer
from askai.chat import (
    ChatOrchestrator,
    CodeAssistant,
    InMemorySuggestionStore,
    SuggestionEngine,
)
from askai.llm import ChatMessage, LLMProvider, LLMResponse
from askai.search import RetrievalAggregator, SearchProvider, SearchResult, TemplateResult

TEST_SECRET = "test-secret"


class FakeLLM(LLMProvider):
    """Completion provider returning a canned reply (or raising)."""

    def __init__(self, reply: str = "", error: Exception | None = None, delay: float = 0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls: list[list[ChatMessage]] = []

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model="fake-model")

    async def close(self) -> None:
        pass


class StaticSearchProvider(SearchProvider):
    """Search provider returning canned results (or failing)."""

    def __init__(
        self,
        name: str,
        results: list[SearchResult] | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
        limit: int = 3
    ):
        self._name = name
        self.results = results or []
        self.error = error
        self.delay = delay
        self.limit = limit
        self.queries: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    async def search(self, query: str) -> list[SearchResult]:
        self.queries.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.results


def make_templates(count: int) -> list[TemplateResult]:
    return [
        TemplateResult(
            id=str(100 + i),
            title=f"Slack workflow {i}",
            url=f"https://n8n.io/workflows/{100 + i}-slack-workflow-{i}/",
            importUrl=f"https://automation.example/templates/{100 + i}/setup",
        )
        for i in range(count)
    ]


def make_aggregator(
    docs: list[SearchResult] | None = None,
    forum: list[SearchResult] | None = None,
    templates: list[TemplateResult] | None = None
) -> RetrievalAggregator:
    return RetrievalAggregator(
        docs=StaticSearchProvider("docs", docs),
        forum=StaticSearchProvider("forum", forum),
        templates=StaticSearchProvider("templates", templates, limit=5),
        timeout=1.0,
    )


@pytest.fixture
def token_issuer():
    """Return an issuer signing with the test secret."""
    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def suggestion_engine():
    """Return an engine over a fresh in-memory store."""
    return SuggestionEngine(InMemorySuggestionStore())


@pytest.fixture
def build_client(token_issuer, suggestion_engine):
    """Return a factory building a TestClient around fakes."""

    def _build(
        llm: LLMProvider | None = None,
        aggregator: RetrievalAggregator | None = None
    ) -> TestClient:
        orchestrator = ChatOrchestrator(
            retrieval=aggregator or make_aggregator(),
            llm=llm,
            suggestions=suggestion_engine,
            system_prompt="system",
        )
        app = create_app(
            token_issuer=token_issuer,
            orchestrator=orchestrator,
            assistant=CodeAssistant(llm=llm, system_prompt="system"),
            suggestions=suggestion_engine,
        )
        return TestClient(app)

    return _build


@pytest.fixture
def auth_headers(token_issuer):
    """Return a valid bearer Authorization header."""
    return {"Authorization": f"Bearer {token_issuer.issue('cert-123')}"}
