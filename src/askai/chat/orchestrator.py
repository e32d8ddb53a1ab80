"""Chat turn orchestration.

A turn runs: parse -> retrieve -> (templates | complete -> segment -> diff)
-> assemble. Authorization happens before a turn starts, at the API gate.
"""

import logging
from dataclasses import dataclass
from uuid import uuid4

from ..errors import MisconfigurationError, UpstreamError, ValidationError
from ..llm import LLMProvider
from ..prompts import get_chat_system_prompt
from ..search import RetrievalAggregator, RetrievalResults
from .messages import (
    CodeDiffMessage,
    ErrorMessage,
    Message,
    QuickReply,
    TextMessage,
    ToolMessage,
    ToolUpdate,
)
from .models import ChatRequest, ChatResponse, NodeContext
from .segmenter import BlockSegmenter, Segment, code_blocks
from .suggestions import SuggestionEngine
from .templates import TemplateResponder

logger = logging.getLogger(__name__)

_RETRIEVAL_STEPS = (
    ("docs", "search_docs", "Buscando en la documentación"),
    ("forum", "search_forum", "Buscando en el foro de la comunidad"),
    ("templates", "search_templates", "Buscando plantillas"),
)

CODE_DIFF_DESCRIPTION = "Sugerencia de cambio para el código del nodo"


def follow_up_replies() -> list[QuickReply]:
    return [
        QuickReply(type="new-suggestion", text="Dame otra solución"),
        QuickReply(type="resolved", text="Listo, gracias", is_feedback=True),
    ]


@dataclass(frozen=True)
class TurnInput:
    """What a chat request asks for, after parsing."""

    session_id: str
    text: str
    node: NodeContext
    event_type: str | None = None

    @property
    def prompt_text(self) -> str:
        if self.text or not self.event_type:
            return self.text
        return f"Evento del cliente: {self.event_type}"


class ChatOrchestrator:
    """Composes retrieval, completion and suggestions into a chat turn.

    Hidden design decisions:
    - Turn branching (templates vs completion)
    - Prompt enrichment with retrieved references
    - Message ordering and quick-reply placement
    - Degrading in-turn failures to an error message
    """

    def __init__(
        self,
        retrieval: RetrievalAggregator,
        llm: LLMProvider | None,
        suggestions: SuggestionEngine,
        segmenter: BlockSegmenter | None = None,
        templates: TemplateResponder | None = None,
        system_prompt: str | None = None,
        max_tokens: int = 1024,
        completion_timeout: float | None = None
    ):
        """Initialize the orchestrator.

        Args:
            retrieval: Knowledge source aggregator
            llm: Completion provider (None when no credential is configured)
            suggestions: Suggestion engine backed by the shared store
            segmenter: Splits generated text into text/code segments
            templates: Templates-only responder
            system_prompt: Custom system prompt (or loaded from prompts/chat_system.txt)
            max_tokens: Completion length limit
            completion_timeout: Seconds before a completion is abandoned (None = wait)
        """
        self._retrieval = retrieval
        self._llm = llm
        self._suggestions = suggestions
        self._segmenter = segmenter or BlockSegmenter()
        self._templates = templates or TemplateResponder()
        self._system_prompt = system_prompt if system_prompt is not None else get_chat_system_prompt()
        self._max_tokens = max_tokens
        self._completion_timeout = completion_timeout

    async def respond(self, request: ChatRequest | None) -> ChatResponse:
        """Run one chat turn.

        Raises:
            ValidationError: If the request carries neither text nor a payload type
            MisconfigurationError: If no completion provider is configured

        Any failure after parsing is returned as a single error message.
        """
        turn = self.parse(request)

        if self._llm is None:
            raise MisconfigurationError("Service misconfigured: completion provider key missing")

        try:
            messages = await self._run_turn(turn)
        except Exception as e:
            logger.exception("chat turn failed for session %s", turn.session_id)
            messages = [ErrorMessage(content=str(e) or type(e).__name__)]

        return ChatResponse(session_id=turn.session_id, messages=messages)

    def parse(self, request: ChatRequest | None) -> TurnInput:
        """Extract session id, query text and node context.

        Text comes from ``payload.text``, falling back to ``question``. A
        payload with only a ``type`` is a client event and is accepted.
        """
        request = request or ChatRequest()
        payload = request.payload

        if payload is not None and isinstance(payload.text, str) and payload.text.strip():
            text = payload.text
        elif isinstance(request.question, str):
            text = request.question
        else:
            text = ""
        text = text.strip()

        event_type = payload.type if payload is not None else None
        if not text and not event_type:
            raise ValidationError("payload required")

        return TurnInput(
            session_id=request.session_id or str(uuid4()),
            text=text,
            node=(payload.context if payload else None) or request.context or NodeContext(),
            event_type=event_type,
        )

    async def _run_turn(self, turn: TurnInput) -> list[Message]:
        results = await self._retrieval.query(turn.text)
        tool_messages = self._tool_messages(turn.text, results)

        if self._templates.applies(turn.text, results.templates):
            logger.info(
                "session %s: answering with %d templates",
                turn.session_id,
                len(results.templates)
            )
            return [*tool_messages, *self._templates.render(results.templates)]

        return [*tool_messages, *await self._complete(turn, results)]

    @staticmethod
    def _tool_messages(text: str, results: RetrievalResults) -> list[ToolMessage]:
        """Running/completed pairs for each retrieval step, in call order."""
        messages: list[ToolMessage] = []
        if not text:
            return messages

        for source, tool_name, title in _RETRIEVAL_STEPS:
            found = getattr(results, source)
            messages.append(ToolMessage(
                tool_name=tool_name,
                display_title=title,
                status="running",
                updates=[ToolUpdate(type="input", data={"query": text})],
            ))
            messages.append(ToolMessage(
                tool_name=tool_name,
                display_title=title,
                status="completed",
                updates=[ToolUpdate(
                    type="output",
                    data={"count": len(found), "results": [r.title for r in found]},
                )],
            ))
        return messages

    async def _complete(self, turn: TurnInput, results: RetrievalResults) -> list[Message]:
        prompt = self.build_prompt(turn.prompt_text, turn.node, results)
        try:
            raw = await self._llm.complete(
                self._system_prompt,
                prompt,
                max_tokens=self._max_tokens,
                timeout=self._completion_timeout,
            )
        except UpstreamError as e:
            logger.warning(
                "session %s: completion failed (%s): %s",
                turn.session_id,
                e.status_code,
                e.message
            )
            return [ErrorMessage(content=e.message)]

        segments = self._segmenter.segment(raw)

        diff_message = None
        blocks = code_blocks(segments)
        if blocks and turn.node.original_code.strip():
            proposed = self._suggestions.select_preferred_code(blocks, turn.node.language)
            if proposed is not None:
                diff_message = self._suggest(turn, proposed)
                segments = _without_code(segments, proposed)

        messages: list[Message] = list(self._content_messages(segments))
        if diff_message is not None:
            messages.append(diff_message)
        elif messages:
            messages[-1] = messages[-1].model_copy(update={"quick_replies": follow_up_replies()})
        return messages

    def _suggest(self, turn: TurnInput, proposed: str) -> CodeDiffMessage:
        original = turn.node.original_code
        suggestion_id = self._suggestions.register(turn.session_id, original, proposed)
        return CodeDiffMessage(
            description=CODE_DIFF_DESCRIPTION,
            code_diff=self._suggestions.build_diff(original, proposed),
            suggestion_id=suggestion_id,
            quick_replies=follow_up_replies(),
        )

    @staticmethod
    def _content_messages(segments: list[Segment]) -> list[TextMessage]:
        """Text segments become messages; code attaches as a snippet."""
        messages: list[TextMessage] = []
        for s in segments:
            if s.kind == "text":
                messages.append(TextMessage(text=s.content))
            elif messages and messages[-1].code_snippet is None:
                messages[-1] = messages[-1].model_copy(update={"code_snippet": s.content})
            else:
                messages.append(TextMessage(text="", code_snippet=s.content))
        return messages

    @staticmethod
    def build_prompt(text: str, node: NodeContext, results: RetrievalResults) -> str:
        """Enrich the user's text with node code and retrieved references."""
        parts = [text]
        if node.original_code.strip():
            language = node.language or "javascript"
            parts.append(f"Código actual del nodo:\n```{language}\n{node.original_code}\n```")
        citations = results.to_citations()
        if citations:
            parts.append(citations)
        return "\n\n".join(parts)


def _without_code(segments: list[Segment], code: str) -> list[Segment]:
    """Drop the first code segment holding ``code``; it is shown as a diff."""
    for i, s in enumerate(segments):
        if s.kind == "code" and s.content == code:
            return segments[:i] + segments[i + 1:]
    return segments
