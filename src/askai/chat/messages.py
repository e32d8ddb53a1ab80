"""Assistant message variants returned by a chat turn.

Every variant serializes with camelCase keys and a ``type`` tag; the
client dispatches on ``type``.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuickReply(_Wire):
    """Canned follow-up action offered to the user."""

    type: Literal["new-suggestion", "resolved"]
    text: str
    is_feedback: bool | None = None


class ToolUpdate(_Wire):
    type: Literal["input", "output"]
    data: dict[str, Any] = Field(default_factory=dict)


class ToolMessage(_Wire):
    """Status of a retrieval step."""

    role: Literal["assistant"] = "assistant"
    type: Literal["tool"] = "tool"
    tool_name: str
    display_title: str
    status: Literal["running", "completed"]
    updates: list[ToolUpdate] = Field(default_factory=list)


class TextMessage(_Wire):
    role: Literal["assistant"] = "assistant"
    type: Literal["message"] = "message"
    text: str
    code_snippet: str | None = None
    quick_replies: list[QuickReply] | None = None


class BlockMessage(_Wire):
    """Markdown block with a title."""

    role: Literal["assistant"] = "assistant"
    type: Literal["block"] = "block"
    title: str
    content: str


class CodeDiffMessage(_Wire):
    """Replacement proposal for a node's code, applicable by id."""

    role: Literal["assistant"] = "assistant"
    type: Literal["code-diff"] = "code-diff"
    description: str
    code_diff: str
    suggestion_id: str
    quick_replies: list[QuickReply] = Field(default_factory=list)


class ErrorMessage(_Wire):
    role: Literal["assistant"] = "assistant"
    type: Literal["error"] = "error"
    content: str


Message = Annotated[
    ToolMessage | TextMessage | BlockMessage | CodeDiffMessage | ErrorMessage,
    Field(discriminator="type"),
]
