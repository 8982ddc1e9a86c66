from collections import Counter

from pydantic import BaseModel, Field, field_validator

from models.content import AnyEntry, ContentEntry


class Section(BaseModel):
    """One titled run of entries inside a journal (e.g. "Dinner" or "Games").

    Entries are kept sorted by `order`, the only placement precedence the
    packer honours. `order` values must be unique.
    """

    id: int | str
    title: str = ""
    entries: list[AnyEntry] = Field(default_factory=list)

    @field_validator("entries")
    @classmethod
    def unique_and_sorted(cls, v: list[ContentEntry]) -> list[ContentEntry]:
        counts = Counter(e.order for e in v)
        duplicates = sorted(order for order, n in counts.items() if n > 1)
        if duplicates:
            raise ValueError(f"duplicate entry order values: {duplicates}")
        return sorted(v, key=lambda e: e.order)

    def visible_entries(self) -> list[ContentEntry]:
        return [e for e in self.entries if e.visible]


class Journal(BaseModel):
    """A year's scrapbook: ordered sections, each paginated on its own."""

    year: int | None = None
    title: str = "Family Scrapbook"
    sections: list[Section] = Field(default_factory=list)
