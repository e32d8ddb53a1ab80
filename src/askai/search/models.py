"""Data models for retrieval results."""

from pydantic import BaseModel, ConfigDict, Field


class SearchResult(BaseModel):
    """A single hit from a knowledge source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(description="Display title")
    url: str = Field(description="Link to the source page")


class TemplateResult(SearchResult):
    """A workflow template hit.

    The import link is derived from the template id by the provider that
    produced the result.
    """

    id: str = Field(description="Template catalog id")
    import_url: str = Field(alias="importUrl", description="Link that imports the template")
    summary: str | None = Field(default=None, description="Short description, when known")


class RetrievalResults(BaseModel):
    """Aggregated output of the three knowledge sources."""

    docs: list[SearchResult] = Field(default_factory=list)
    forum: list[SearchResult] = Field(default_factory=list)
    templates: list[TemplateResult] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.docs or self.forum or self.templates)

    def to_citations(self) -> str:
        """Format non-empty sources as a citations section for a prompt.

        Returns:
            Markdown section, or an empty string when nothing was found
        """
        sections = []
        for heading, results in (
            ("Documentación", self.docs),
            ("Foro de la comunidad", self.forum),
            ("Plantillas", self.templates),
        ):
            if not results:
                continue
            lines = [f"{heading}:"]
            lines.extend(f"- {r.title} ({r.url})" for r in results)
            sections.append("\n".join(lines))

        if not sections:
            return ""
        return "Referencias:\n" + "\n\n".join(sections)
