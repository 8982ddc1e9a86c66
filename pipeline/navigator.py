"""Cover page and page navigation for one viewing session.

The navigator is a two-state machine:

  no_content          nothing to show; navigation calls are ignored
  viewing(i)          page i of N is current (1-based)

`load()` packs a section's entries, optionally prepends a cover page and
enters viewing(1), or no_content when there is nothing at all to show.
`next()` / `previous()` stop at the ends, `jump()` clamps into [1, N].
Out-of-range requests are corrected, never rejected.
"""
import logging
from collections.abc import Iterable
from typing import Literal

from models.content import ContentEntry
from models.page_plan import Page, PagePlan, renumber
from pipeline import packer
from settings import Settings

logger = logging.getLogger(__name__)

ViewState = Literal["no_content", "viewing"]


class Navigator:
    """Owns the pages and the current-page cursor of one viewing session."""

    def __init__(self, settings: Settings | None = None, include_cover: bool | None = None) -> None:
        self.settings = settings or Settings()
        self.include_cover = (
            self.settings.include_cover if include_cover is None else include_cover
        )
        self.pages: list[Page] = []
        self.current_index: int | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, entries: Iterable[ContentEntry], title: str | None = None) -> ViewState:
        """Paginate `entries` and start viewing at page 1.

        Raises ValueError if `entries` is None.
        """
        if entries is None:
            raise ValueError("Navigator.load() needs a sequence of entries, got None")
        pages = packer.pack(entries, **packer.options_from(self.settings))
        if self.include_cover:
            pages.insert(0, Page(index=1, kind="cover", title=title))
        return self._open(pages)

    def load_plan(self, plan: PagePlan) -> ViewState:
        """Start viewing an already assembled plan (cover pages included as-is)."""
        return self._open(list(plan.pages))

    def _open(self, pages: list[Page]) -> ViewState:
        self.pages = renumber(pages)
        self.current_index = 1 if self.pages else None
        logger.debug("Loaded %d pages → %s", len(self.pages), self.state)
        return self.state

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ViewState:
        return "no_content" if self.current_index is None else "viewing"

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def current_page(self) -> Page | None:
        if self.current_index is None:
            return None
        return self.pages[self.current_index - 1]

    @property
    def has_next(self) -> bool:
        return self.current_index is not None and self.current_index < self.page_count

    @property
    def has_previous(self) -> bool:
        return self.current_index is not None and self.current_index > 1

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def next(self) -> int | None:
        if self.has_next:
            self.current_index += 1
        elif self.current_index is None:
            logger.debug("next() ignored: no content loaded")
        return self.current_index

    def previous(self) -> int | None:
        if self.has_previous:
            self.current_index -= 1
        elif self.current_index is None:
            logger.debug("previous() ignored: no content loaded")
        return self.current_index

    def jump(self, index: int) -> int | None:
        """Move to page `index`, clamped into [1, N]."""
        if self.current_index is None:
            logger.debug("jump(%s) ignored: no content loaded", index)
            return None
        clamped = min(max(index, 1), self.page_count)
        if clamped != index:
            logger.debug("jump(%d) clamped to %d", index, clamped)
        self.current_index = clamped
        return self.current_index
