"""Request, response and record models for the chat service."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .messages import Message


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Suggestion(BaseModel):
    """A stored proposal to replace a node's code."""

    model_config = ConfigDict(frozen=True)

    id: str
    session_id: str
    original_code: str
    proposed_code: str


class NodeContext(_Wire):
    """The workflow node the user is working on.

    Accepts the node's code under ``originalCode``, ``jsCode``,
    ``pythonCode`` or ``code``.
    """

    model_config = ConfigDict(extra="allow")

    original_code: str = ""
    language: str = ""

    @model_validator(mode="before")
    @classmethod
    def _collect_code(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("originalCode") or data.get("original_code"):
            return data
        data = dict(data)
        if data.get("pythonCode"):
            data["originalCode"] = data["pythonCode"]
            data.setdefault("language", "python")
        elif data.get("jsCode"):
            data["originalCode"] = data["jsCode"]
            data.setdefault("language", "javascript")
        elif isinstance(data.get("code"), str):
            data["originalCode"] = data["code"]
        return data


class ChatPayload(_Wire):
    text: str | None = None
    type: str | None = None
    context: NodeContext | None = None


class ChatRequest(_Wire):
    session_id: str | None = None
    payload: ChatPayload | None = None
    question: str | None = None
    context: NodeContext | None = None


class ChatResponse(_Wire):
    session_id: str
    messages: list[Message]


class AskAIRequest(_Wire):
    question: Any = None
    context: Any = None
    for_node: Any = None


class AskAIResponse(_Wire):
    code: str


class ApplySuggestionRequest(_Wire):
    session_id: str | None = None
    suggestion_id: str | None = None


class ApplySuggestionResponse(_Wire):
    session_id: str
    parameters: dict[str, str] = Field(description="Node parameters to write back")
