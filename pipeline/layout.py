"""Journal layout — paginate every section of a journal into one PagePlan.

Consumes the Journal produced by ingest and describes every page of the
scrapbook: an optional cover, the content pages of each section in order,
and an optional back cover.

Layout decisions:
  - Every section starts on a new page and is packed on its own.
  - Hidden entries (`visible = False`) are dropped before packing.
  - The first page of a section carries the section title; later pages
    carry "<title> (continued)".
  - A section with no visible entries still gets one empty page with its
    title so it never silently disappears from the book.

Reads:  data/.cache/journal.json    (Journal)
Writes: data/.cache/page_plan.json  (PagePlan)
"""
import logging

from models.journal import Journal, Section
from models.page_plan import Page, PagePlan, renumber
from pipeline import packer
from settings import Settings

logger = logging.getLogger(__name__)

CONTINUED_SUFFIX = " (continued)"
BACK_COVER_TITLE = "Thank You"


def run(settings: Settings, journal: Journal) -> PagePlan:
    """Build the PagePlan and write page_plan.json.

    Returns the completed PagePlan.
    """
    plan = build_plan(settings, journal)

    artifact_path = settings.cache_dir / "page_plan.json"
    settings.cache_dir.mkdir(parents=True, exist_ok=True)
    artifact_path.write_text(plan.model_dump_json(indent=2), encoding="utf-8")

    logger.info("Layout complete → %s", artifact_path)
    logger.info("  Total pages: %d", len(plan.pages))
    _log_page_summary(plan.pages)

    return plan


def build_plan(settings: Settings, journal: Journal) -> PagePlan:
    """Paginate `journal` without touching the filesystem."""
    pages: list[Page] = []

    if settings.include_cover:
        pages.append(_make_cover(journal))

    options = packer.options_from(settings)
    for section in journal.sections:
        pages.extend(_make_section_pages(section, options))

    if settings.include_back_cover:
        pages.append(Page(index=1, kind="back_cover", title=BACK_COVER_TITLE))

    return PagePlan(title=journal.title, year=journal.year, pages=renumber(pages))


# ---------------------------------------------------------------------------
# Cover page
# ---------------------------------------------------------------------------

def _make_cover(journal: Journal) -> Page:
    return Page(index=1, kind="cover", title=journal.title)


# ---------------------------------------------------------------------------
# Section pages
# ---------------------------------------------------------------------------

def _make_section_pages(section: Section, options: dict) -> list[Page]:
    entries = section.visible_entries()
    hidden = len(section.entries) - len(entries)
    if hidden:
        logger.debug("Section %s: skipping %d hidden entries", section.id, hidden)

    packed = packer.pack(entries, **options)
    if not packed:
        return [Page(index=1, kind="content", section_ref=section.id, title=section.title)]

    return [
        page.model_copy(update={
            "section_ref": section.id,
            "title": _page_title(section.title, continued=i > 0),
            "continued": i > 0,
        })
        for i, page in enumerate(packed)
    ]


def _page_title(title: str, continued: bool) -> str:
    if continued and title:
        return title + CONTINUED_SUFFIX
    return title


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _log_page_summary(pages: list[Page]) -> None:
    counts: dict[str, int] = {}
    for p in pages:
        counts[p.kind] = counts.get(p.kind, 0) + 1
    for kind, count in sorted(counts.items()):
        logger.info("  %-18s %d", kind, count)
