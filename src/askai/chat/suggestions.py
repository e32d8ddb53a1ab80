"""Code replacement suggestions.

Picks the generated block that best fits the node, renders it as a
whole-block diff against the node's current code, and records it so the
client can apply it later.
"""

import logging
import re
from collections.abc import Callable

from uuid_extensions import uuid7

from ..errors import ConflictError, NotFoundError, ValidationError
from .models import ApplySuggestionResponse, Suggestion
from .segmenter import Segment
from .store import SuggestionStore

logger = logging.getLogger(__name__)

_LANGUAGE_FAMILIES: dict[str, tuple[str, ...]] = {
    "javascript": ("javascript", "js"),
    "typescript": ("typescript", "ts"),
    "python": ("python", "py"),
}
# Used for the families the hint does not select
_FALLBACK_ORDER = ("javascript", "typescript", "python")

_LINE_BREAK = re.compile(r"\r?\n")


def _hinted_family(language_hint: str) -> str | None:
    hint = (language_hint or "").lower()
    if "python" in hint:
        return "python"
    if "typescript" in hint or "ts" in hint:
        return "typescript"
    if "javascript" in hint or "js" in hint:
        return "javascript"
    return None


def language_priority(language_hint: str) -> list[str]:
    """Ordered language tags, hinted family first and 'text' last."""
    first = _hinted_family(language_hint)
    families = ([first] if first else []) + [f for f in _FALLBACK_ORDER if f != first]
    order = [tag for family in families for tag in _LANGUAGE_FAMILIES[family]]
    order.append("text")
    return order


def select_preferred_code(blocks: list[Segment], language_hint: str = "") -> str | None:
    """Choose the code block that best matches the node's language.

    Args:
        blocks: Code segments in generation order
        language_hint: Free-form hint such as the node's language

    Returns:
        The chosen block's code, or None when there are no blocks
    """
    if not blocks:
        return None

    for tag in language_priority(language_hint):
        for block in blocks:
            if (block.language or "").lower() == tag:
                return block.content
    return blocks[0].content


def build_diff(original: str, proposed: str) -> str:
    """Render a whole-block replacement in unified-diff notation.

    No line matching is attempted: every original line is removed and
    every proposed line added.
    """
    old_lines = _LINE_BREAK.split(original)
    new_lines = _LINE_BREAK.split(proposed)
    header = f"@@ -1,{len(old_lines)} +1,{len(new_lines)} @@"
    body = [f"-{line}" for line in old_lines] + [f"+{line}" for line in new_lines]
    return "\n".join([header, *body])


class SuggestionEngine:
    """Mints and resolves code suggestions.

    Hidden design decisions:
    - Block selection policy
    - Diff representation
    - Identifier scheme
    """

    def __init__(
        self,
        store: SuggestionStore,
        id_factory: Callable[[], str] = lambda: str(uuid7())
    ):
        self._store = store
        self._id_factory = id_factory

    @property
    def store(self) -> SuggestionStore:
        return self._store

    def select_preferred_code(self, blocks: list[Segment], language_hint: str = "") -> str | None:
        return select_preferred_code(blocks, language_hint)

    def build_diff(self, original: str, proposed: str) -> str:
        return build_diff(original, proposed)

    def register(self, session_id: str, original: str, proposed: str) -> str:
        """Store a suggestion and return its fresh id."""
        suggestion = Suggestion(
            id=self._id_factory(),
            session_id=session_id,
            original_code=original,
            proposed_code=proposed,
        )
        self._store.put(suggestion)
        logger.debug("registered suggestion %s for session %s", suggestion.id, session_id)
        return suggestion.id

    def apply(self, session_id: str | None, suggestion_id: str | None) -> ApplySuggestionResponse:
        """Resolve a suggestion for the session that produced it.

        The suggestion stays stored, so applying twice yields the same code.

        Raises:
            ValidationError: If either id is missing
            NotFoundError: If the suggestion is unknown
            ConflictError: If the suggestion belongs to another session
        """
        if not session_id or not suggestion_id:
            raise ValidationError("sessionId and suggestionId required")

        suggestion = self._store.get(suggestion_id)
        if suggestion is None:
            raise NotFoundError()

        if suggestion.session_id != session_id:
            logger.info("suggestion %s requested from a foreign session", suggestion_id)
            raise ConflictError()

        return ApplySuggestionResponse(
            session_id=session_id,
            parameters={"jsCode": suggestion.proposed_code},
        )
