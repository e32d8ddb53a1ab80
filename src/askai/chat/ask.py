"""Single-shot code answers for a workflow node."""

import json
import logging
from typing import Any

from ..errors import MisconfigurationError, UpstreamError, ValidationError
from ..llm import LLMProvider
from ..prompts import get_ask_ai_system_prompt
from .models import AskAIRequest, AskAIResponse
from .segmenter import strip_code_fences

logger = logging.getLogger(__name__)


def _as_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


class CodeAssistant:
    """Answers a question with plain code, no prose and no fences."""

    def __init__(
        self,
        llm: LLMProvider | None,
        system_prompt: str | None = None,
        max_tokens: int = 1024,
        completion_timeout: float | None = None
    ):
        self._llm = llm
        self._system_prompt = system_prompt if system_prompt is not None else get_ask_ai_system_prompt()
        self._max_tokens = max_tokens
        self._completion_timeout = completion_timeout

    @staticmethod
    def build_prompt(request: AskAIRequest) -> str:
        return (
            f"Nodo: {_as_json(request.for_node)}\n"
            f"Contexto: {_as_json(request.context)}\n"
            f"Pregunta: {request.question}"
        )

    async def ask(self, request: AskAIRequest | None) -> AskAIResponse:
        """Generate code for the question.

        Raises:
            ValidationError: If the question is missing or not a string
            MisconfigurationError: If no completion provider is configured
            AskAIError: Provider failures, mapped to the client-facing status
        """
        if request is None or not request.question or not isinstance(request.question, str):
            raise ValidationError("question required")

        if self._llm is None:
            raise MisconfigurationError("Service misconfigured: completion provider key missing")

        try:
            raw = await self._llm.complete(
                self._system_prompt,
                self.build_prompt(request),
                max_tokens=self._max_tokens,
                timeout=self._completion_timeout,
            )
        except UpstreamError as e:
            logger.warning("ask-ai failed (%s): %s", e.status_code, e.message)
            raise e.to_http() from e

        return AskAIResponse(code=strip_code_fences(raw))
