"""Templates-only replies that skip the completion provider."""

import re

from ..config import TEMPLATE_DISPLAY_LIMIT, TEMPLATE_SUMMARY_MAX_LENGTH
from ..search import TemplateResult
from .messages import BlockMessage, QuickReply, TextMessage

_TEMPLATE_INTENT = re.compile(r"\b(template|plantilla|workflow)s?\b", re.IGNORECASE)

BLOCK_TITLE = "Plantillas encontradas"
GUIDANCE_TEXT = "Aquí tienes plantillas listas para importar en tu instancia."
DEFAULT_SUMMARY = "_Workflow listo para usar._"


class TemplateResponder:
    """Renders found templates as an importable list."""

    def __init__(
        self,
        display_limit: int = TEMPLATE_DISPLAY_LIMIT,
        summary_max_length: int = TEMPLATE_SUMMARY_MAX_LENGTH
    ):
        self._display_limit = display_limit
        self._summary_max_length = summary_max_length

    @staticmethod
    def wants_templates(text: str) -> bool:
        """Whether the query asks for templates or workflows."""
        return bool(_TEMPLATE_INTENT.search(text or ""))

    def applies(self, text: str, templates: list[TemplateResult]) -> bool:
        return bool(templates) and self.wants_templates(text)

    def render(self, templates: list[TemplateResult]) -> list[BlockMessage | TextMessage]:
        """Build the block listing and the guidance message.

        Returns:
            Exactly two messages; the second carries the quick replies
        """
        entries = []
        for t in templates[:self._display_limit]:
            if t.summary:
                summary = f"_{t.summary[:self._summary_max_length]}..._"
            else:
                summary = DEFAULT_SUMMARY
            entries.append(
                f"### 📄 {t.title}\n{summary}\n\n"
                f"➡️ **[⬇️ Importar en tu n8n]({t.import_url})**"
            )

        return [
            BlockMessage(title=BLOCK_TITLE, content="\n\n---\n\n".join(entries)),
            TextMessage(
                text=GUIDANCE_TEXT,
                quick_replies=[
                    QuickReply(type="new-suggestion", text="Buscar más plantillas"),
                    QuickReply(type="resolved", text="Listo, gracias", is_feedback=True),
                ],
            ),
        ]
