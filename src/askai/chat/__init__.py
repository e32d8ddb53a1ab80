"""Chat turn assembly: segmentation, suggestions, templates and orchestration."""

from .ask import CodeAssistant
from .messages import (
    BlockMessage,
    CodeDiffMessage,
    ErrorMessage,
    Message,
    QuickReply,
    TextMessage,
    ToolMessage,
    ToolUpdate,
)
from .models import (
    ApplySuggestionRequest,
    ApplySuggestionResponse,
    AskAIRequest,
    AskAIResponse,
    ChatPayload,
    ChatRequest,
    ChatResponse,
    NodeContext,
    Suggestion,
)
from .orchestrator import ChatOrchestrator, TurnInput
from .segmenter import BlockSegmenter, Segment, segment, strip_code_fences
from .store import InMemorySuggestionStore, SuggestionStore, create_suggestion_store
from .suggestions import SuggestionEngine, build_diff, select_preferred_code
from .templates import TemplateResponder

__all__ = [
    "CodeAssistant",
    "BlockMessage",
    "CodeDiffMessage",
    "ErrorMessage",
    "Message",
    "QuickReply",
    "TextMessage",
    "ToolMessage",
    "ToolUpdate",
    "ApplySuggestionRequest",
    "ApplySuggestionResponse",
    "AskAIRequest",
    "AskAIResponse",
    "ChatPayload",
    "ChatRequest",
    "ChatResponse",
    "NodeContext",
    "Suggestion",
    "ChatOrchestrator",
    "TurnInput",
    "BlockSegmenter",
    "Segment",
    "segment",
    "strip_code_fences",
    "InMemorySuggestionStore",
    "SuggestionStore",
    "create_suggestion_store",
    "SuggestionEngine",
    "build_diff",
    "select_preferred_code",
    "TemplateResponder",
]
