"""Page packing — partition one section's entries into content pages.

A single greedy forward pass over the entries in `order`:

  - `manual_break_before` starts a new page (no-op on an empty page).
  - menu / full_page_photo entries sit alone on their own page.
  - photo entries are capped at `photo_share_per_page` per page; their
    heights count towards the page but never trigger a break themselves.
  - everything else starts a new page when the estimated height would pass
    `page_height_budget - safety_margin`. Every page starts with
    `base_padding` already spent for its header and footer.
  - `manual_break_after` closes the page right after the entry.

An entry taller than a whole page still gets a page of its own; nothing is
ever split, dropped, duplicated or reordered.

With `pair_blogs` a blog that directly follows a lone blog at the end of the
current page joins it regardless of height, and the pair closes the page.
"""
import logging
from collections.abc import Iterable

from models.content import ContentEntry, as_kind_entry
from models.page_plan import Page
from pipeline.estimate import estimate_height
from settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_PAGE_HEIGHT: int = Settings.model_fields["page_height_budget"].default
DEFAULT_PHOTO_SHARE: int = Settings.model_fields["photo_share_per_page"].default
DEFAULT_SAFETY_MARGIN: int = Settings.model_fields["safety_margin"].default
DEFAULT_BASE_PADDING: int = Settings.model_fields["base_padding"].default


class _PageBuilder:
    """Accumulates the page currently being filled."""

    def __init__(self, base_padding: int) -> None:
        self.base_padding = base_padding
        self.pages: list[list[ContentEntry]] = []
        self._start_page()

    def _start_page(self) -> None:
        self.entries: list[ContentEntry] = []
        self.height = self.base_padding
        self.photos = 0
        self.blogs = 0

    def add(self, entry: ContentEntry, height: int) -> None:
        self.entries.append(entry)
        self.height += height
        if entry.kind == "photo":
            self.photos += 1
        elif entry.kind == "blog":
            self.blogs += 1

    def close(self) -> None:
        if not self.entries:
            return
        self.pages.append(self.entries)
        logger.debug(
            "Closed page %d: %d entries, ~%d px",
            len(self.pages), len(self.entries), self.height,
        )
        self._start_page()

    def awaiting_blog_pair(self) -> bool:
        return bool(self.entries) and self.entries[-1].kind == "blog" and self.blogs == 1


def pack(
    entries: Iterable[ContentEntry],
    page_height_budget: int = DEFAULT_PAGE_HEIGHT,
    *,
    photo_share_per_page: int = DEFAULT_PHOTO_SHARE,
    safety_margin: int = DEFAULT_SAFETY_MARGIN,
    base_padding: int = DEFAULT_BASE_PADDING,
    pair_blogs: bool = False,
) -> list[Page]:
    """Pack `entries` into content pages numbered from 1.

    Returns an empty list for an empty input. Raises ValueError if `entries`
    is None.
    """
    if entries is None:
        raise ValueError("pack() needs a sequence of entries, got None")

    ordered = sorted((as_kind_entry(e) for e in entries), key=lambda e: e.order)
    height_limit = page_height_budget - safety_margin
    builder = _PageBuilder(base_padding)

    for entry in ordered:
        if entry.manual_break_before:
            builder.close()

        height = estimate_height(entry)
        if entry.is_isolated:
            builder.close()
            builder.add(entry, height)
            builder.close()
        elif entry.kind == "photo":
            if builder.photos >= photo_share_per_page:
                builder.close()
            builder.add(entry, height)
        elif pair_blogs and entry.kind == "blog" and builder.awaiting_blog_pair():
            builder.add(entry, height)
            builder.close()
        else:
            if builder.entries and builder.height + height > height_limit:
                builder.close()
            builder.add(entry, height)

        if entry.manual_break_after:
            builder.close()

    builder.close()

    return [
        Page(index=i, kind="content", entries=page_entries)
        for i, page_entries in enumerate(builder.pages, start=1)
    ]


def options_from(settings: Settings) -> dict:
    """Packing keyword arguments taken from `settings`."""
    return {
        "page_height_budget": settings.page_height_budget,
        "photo_share_per_page": settings.photo_share_per_page,
        "safety_margin": settings.safety_margin,
        "base_padding": settings.base_padding,
        "pair_blogs": settings.pair_blogs,
    }
