"""Content entries — the items a section's pages are packed from.

Each entry kind is its own model with a typed payload. `AnyEntry` is the
tagged union used wherever entries are stored; the tag is derived from the
`kind` field, and a kind that is not recognised selects `UnknownEntry`
instead of failing validation.

Payloads are lenient: a missing or malformed payload becomes the kind's
empty payload so that pagination stays total over whatever the content
store hands us.
"""
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
)

KNOWN_KINDS = frozenset({"heading", "text", "photo", "menu", "full_page_photo", "blog"})

# Kinds that always occupy a page of their own
ISOLATED_KINDS = frozenset({"menu", "full_page_photo"})


def _as_text(v: Any) -> str:
    if v is None:
        return ""
    return v if isinstance(v, str) else str(v)


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

class TextPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = ""

    @field_validator("text", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> str:
        return _as_text(v)


class HeadingPayload(TextPayload):
    level: int = 1

    @field_validator("level", mode="before")
    @classmethod
    def clamp_level(cls, v: Any) -> int:
        try:
            level = int(v)
        except (TypeError, ValueError):
            return 1
        return min(max(level, 1), 6)


class PhotoPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    image: str | None = None
    caption: str | None = None


class MenuPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    image: str | None = None
    title: str | None = None


class BlogPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    body: str = ""
    featured_image: str | None = None
    images: list[str] = Field(default_factory=list)

    @field_validator("title", "body", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("images", mode="before")
    @classmethod
    def keep_image_refs(cls, v: Any) -> list[str]:
        if not isinstance(v, (list, tuple)):
            return []
        return [ref for ref in v if isinstance(ref, str) and ref]

    @property
    def image_count(self) -> int:
        """Featured image (if any) plus every gallery image."""
        return len(self.images) + (1 if self.featured_image else 0)


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------

class ContentEntry(BaseModel):
    """Common fields of every entry.

    `order` is the only placement precedence. `manual_break_before` /
    `manual_break_after` force a page boundary around the entry; `visible`
    lets the layout stage drop hidden entries before packing.
    """

    model_config = ConfigDict(frozen=True)

    id: int | str
    kind: str
    order: int
    manual_break_before: bool = False
    manual_break_after: bool = False
    visible: bool = True

    @field_validator("payload", mode="before", check_fields=False)
    @classmethod
    def lenient_payload(cls, v: Any) -> Any:
        if isinstance(v, (Mapping, BaseModel)):
            return v
        return {}

    @property
    def is_isolated(self) -> bool:
        return self.kind in ISOLATED_KINDS


class HeadingEntry(ContentEntry):
    kind: Literal["heading"] = "heading"
    payload: HeadingPayload = Field(default_factory=HeadingPayload)


class TextEntry(ContentEntry):
    kind: Literal["text"] = "text"
    payload: TextPayload = Field(default_factory=TextPayload)


class PhotoEntry(ContentEntry):
    kind: Literal["photo"] = "photo"
    payload: PhotoPayload = Field(default_factory=PhotoPayload)


class FullPagePhotoEntry(ContentEntry):
    kind: Literal["full_page_photo"] = "full_page_photo"
    payload: PhotoPayload = Field(default_factory=PhotoPayload)


class MenuEntry(ContentEntry):
    kind: Literal["menu"] = "menu"
    payload: MenuPayload = Field(default_factory=MenuPayload)


class BlogEntry(ContentEntry):
    kind: Literal["blog"] = "blog"
    payload: BlogPayload = Field(default_factory=BlogPayload)


class UnknownEntry(ContentEntry):
    """Any kind the engine does not know. Packed like a plain text block."""

    kind: str = "unknown"
    payload: dict[str, Any] = Field(default_factory=dict)


def _entry_tag(value: Any) -> str:
    if isinstance(value, Mapping):
        kind = value.get("kind")
    else:
        kind = getattr(value, "kind", None)
    return kind if kind in KNOWN_KINDS else "unknown"


AnyEntry = Annotated[
    Union[
        Annotated[HeadingEntry, Tag("heading")],
        Annotated[TextEntry, Tag("text")],
        Annotated[PhotoEntry, Tag("photo")],
        Annotated[FullPagePhotoEntry, Tag("full_page_photo")],
        Annotated[MenuEntry, Tag("menu")],
        Annotated[BlogEntry, Tag("blog")],
        Annotated[UnknownEntry, Tag("unknown")],
    ],
    Discriminator(_entry_tag),
]

_ENTRY_ADAPTER: TypeAdapter[ContentEntry] = TypeAdapter(AnyEntry)

_KIND_MODELS: dict[str, type[ContentEntry]] = {
    "heading": HeadingEntry,
    "text": TextEntry,
    "photo": PhotoEntry,
    "full_page_photo": FullPagePhotoEntry,
    "menu": MenuEntry,
    "blog": BlogEntry,
    "unknown": UnknownEntry,
}


def parse_entry(data: Mapping[str, Any] | ContentEntry) -> ContentEntry:
    """Validate a single entry into the model matching its `kind`."""
    return _ENTRY_ADAPTER.validate_python(data)


def as_kind_entry(entry: ContentEntry) -> ContentEntry:
    """Return `entry` as an instance of the model its `kind` selects.

    A bare ContentEntry (or an entry whose class disagrees with its kind) is
    re-parsed from its fields; anything else is returned unchanged.
    """
    if isinstance(entry, _KIND_MODELS[_entry_tag(entry)]):
        return entry
    return parse_entry(entry.model_dump())
