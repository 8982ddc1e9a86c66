from typing import Literal

from pydantic import BaseModel, Field

from models.content import AnyEntry


class Page(BaseModel):
    index: int = Field(ge=1)
    kind: Literal["cover", "content", "back_cover"] = "content"
    entries: list[AnyEntry] = Field(default_factory=list)
    section_ref: int | str | None = None
    title: str | None = None  # Section title, suffixed " (continued)" after its first page
    continued: bool = False

    @property
    def photo_count(self) -> int:
        return sum(1 for e in self.entries if e.kind == "photo")

    @property
    def entry_ids(self) -> list[int | str]:
        return [e.id for e in self.entries]


class PagePlan(BaseModel):
    title: str = ""
    year: int | None = None
    pages: list[Page] = Field(default_factory=list)

    @property
    def content_pages(self) -> list[Page]:
        return [p for p in self.pages if p.kind == "content"]


def renumber(pages: list[Page]) -> list[Page]:
    """Return copies of `pages` with indices 1..N in list order."""
    return [p.model_copy(update={"index": i}) for i, p in enumerate(pages, start=1)]
