"""Render — turn a PagePlan into an HTML scrapbook via Jinja2 (PDF via WeasyPrint).

Reads:  data/.cache/page_plan.json     (PagePlan)
        data/template/design.yaml      (DesignSystem — page size, colours, fonts)
Writes: data/output/scrapbook_<title>_<year>.html
        data/output/scrapbook_<title>_<year>.pdf   (only when requested)

The packer only decides which entries share a page. Visual grouping happens
here: all photos of a page render as one grid block, placed where the
page's first photo appears.
"""
import logging
import re
import unicodedata
from pathlib import Path
from typing import Literal

import markdown as _markdown_lib
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup
from pydantic import BaseModel, Field

try:
    import weasyprint as _weasyprint  # requires native GTK/Pango libs at runtime
except OSError:  # pragma: no cover — native libs absent in test env
    _weasyprint = None  # type: ignore[assignment]

from models.content import AnyEntry
from models.design import DesignSystem
from models.page_plan import Page, PagePlan
from settings import Settings

logger = logging.getLogger(__name__)

# Path (relative to the package root) where Jinja2 looks for templates
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class PageBlock(BaseModel):
    """One visual block of a page: a single entry or a grid of photos."""

    kind: Literal["entry", "photo_grid"]
    entries: list[AnyEntry] = Field(default_factory=list)


def run(
    settings: Settings,
    plan: PagePlan,
    design: DesignSystem | None = None,
    pdf: bool = False,
) -> Path:
    """Render the PagePlan and write it to the output directory.

    Returns the path of the PDF when `pdf` is set, otherwise of the HTML file.
    """
    if design is None:
        design = DesignSystem.load_or_default(settings.design_yaml_path)

    html = render_html(plan, design)

    output_path = _output_path(settings, plan)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    logger.info("Render complete → %s", output_path)

    if not pdf:
        return output_path

    pdf_path = output_path.with_suffix(".pdf")
    _write_pdf(html, pdf_path, settings)
    logger.info("PDF written → %s", pdf_path)
    return pdf_path


# ---------------------------------------------------------------------------
# HTML rendering
# ---------------------------------------------------------------------------

def render_html(plan: PagePlan, design: DesignSystem) -> str:
    """Render the Jinja2 template to an HTML string."""
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "j2"]),
    )
    env.filters["markdown"] = lambda text: Markup(
        _markdown_lib.markdown(text or "", extensions=["extra"])
    )
    template = env.get_template("scrapbook.html.j2")
    return template.render(
        plan=plan,
        pages=[(page, page_blocks(page)) for page in plan.pages],
        ds=design,
    )


def page_blocks(page: Page) -> list[PageBlock]:
    """Split a page's entries into render blocks, gathering all photos in one grid."""
    blocks: list[PageBlock] = []
    grid: PageBlock | None = None
    for entry in page.entries:
        if entry.kind != "photo":
            blocks.append(PageBlock(kind="entry", entries=[entry]))
            continue
        if grid is None:
            grid = PageBlock(kind="photo_grid")
            blocks.append(grid)
        grid.entries.append(entry)
    return blocks


def _write_pdf(html: str, pdf_path: Path, settings: Settings) -> None:
    if _weasyprint is None:  # pragma: no cover
        raise RuntimeError(
            "WeasyPrint native libraries (GTK/Pango) are not available. "
            "Follow https://doc.courtbouillon.org/weasyprint/stable/first_steps.html"
        )
    _weasyprint.HTML(
        string=html,
        base_url=str(settings.project_dir.resolve()),
    ).write_pdf(str(pdf_path))


# ---------------------------------------------------------------------------
# Output path
# ---------------------------------------------------------------------------

def _output_path(settings: Settings, plan: PagePlan) -> Path:
    """Build the output HTML path from the plan title and year."""
    title_slug = _slugify(plan.title)
    if plan.year is not None:
        filename = f"scrapbook_{title_slug}_{plan.year}.html"
    else:
        filename = f"scrapbook_{title_slug}.html"
    return settings.output_dir / filename


def _slugify(text: str) -> str:
    """Convert a title to a safe ASCII filename slug."""
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = re.sub(r"[^a-z0-9]+", "_", text)
    text = text.strip("_")
    return text[:50] or "scrapbook"
