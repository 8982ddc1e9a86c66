"""Tests for HTML rendering."""
from unittest.mock import MagicMock, patch

import pytest

from models.content import parse_entry
from models.design import DesignSystem
from models.page_plan import Page, PagePlan
from pipeline.render import _output_path, _slugify, page_blocks, render_html, run
from settings import Settings


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _entry(kind, order, **payload):
    return parse_entry({"id": f"{kind}-{order}", "kind": kind, "order": order, "payload": payload})


def _plan(*pages, title="Thanksgiving", year=2024) -> PagePlan:
    return PagePlan(title=title, year=year, pages=list(pages))


def _cover_plan() -> PagePlan:
    return _plan(Page(index=1, kind="cover", title="Thanksgiving"))


# ---------------------------------------------------------------------------
# page_blocks
# ---------------------------------------------------------------------------

class TestPageBlocks:
    def test_non_photo_entries_are_single_blocks(self):
        page = Page(index=1, entries=[_entry("heading", 1, text="H"), _entry("text", 2, text="T")])
        blocks = page_blocks(page)
        assert [b.kind for b in blocks] == ["entry", "entry"]

    def test_contiguous_photos_form_one_grid(self):
        page = Page(index=1, entries=[_entry("heading", 1), _entry("photo", 2), _entry("photo", 3)])
        blocks = page_blocks(page)
        assert [b.kind for b in blocks] == ["entry", "photo_grid"]
        assert [e.id for e in blocks[1].entries] == ["photo-2", "photo-3"]

    def test_interleaved_photos_gather_at_first_photo(self):
        page = Page(index=1, entries=[
            _entry("photo", 1), _entry("text", 2), _entry("photo", 3), _entry("heading", 4),
        ])
        blocks = page_blocks(page)
        assert [b.kind for b in blocks] == ["photo_grid", "entry", "entry"]
        assert [e.id for e in blocks[0].entries] == ["photo-1", "photo-3"]
        assert [b.entries[0].id for b in blocks[1:]] == ["text-2", "heading-4"]

    def test_empty_page_has_no_blocks(self):
        assert page_blocks(Page(index=1)) == []


# ---------------------------------------------------------------------------
# render_html
# ---------------------------------------------------------------------------

class TestRenderHtml:
    def test_cover_title_and_year(self):
        html = render_html(_cover_plan(), DesignSystem())
        assert "Thanksgiving" in html
        assert "2024" in html
        assert 'class="page cover"' in html

    def test_page_size_in_css(self):
        html = render_html(_cover_plan(), DesignSystem())
        assert "600px 820px" in html

    def test_colors_in_css(self):
        html = render_html(_cover_plan(), DesignSystem())
        assert "#F5ECD7" in html

    def test_back_cover_default_title(self):
        html = render_html(_plan(Page(index=1, kind="back_cover")), DesignSystem())
        assert "Thank You" in html

    def test_content_page_title_and_number(self):
        page = Page(index=2, title="Dinner (continued)", entries=[_entry("text", 1, text="hello")])
        html = render_html(_plan(page), DesignSystem())
        assert "Dinner (continued)" in html
        assert '<div class="page-number">2</div>' in html

    def test_heading_uses_level(self):
        page = Page(index=1, entries=[_entry("heading", 1, text="Dessert", level=3)])
        html = render_html(_plan(page), DesignSystem())
        assert "<h3" in html
        assert "Dessert</h3>" in html

    def test_text_is_rendered_from_markdown(self):
        page = Page(index=1, entries=[_entry("text", 1, text="We ate **pie**.")])
        html = render_html(_plan(page), DesignSystem())
        assert "<strong>pie</strong>" in html

    def test_heading_text_is_escaped(self):
        page = Page(index=1, entries=[_entry("heading", 1, text="Tom & Jerry <3")])
        html = render_html(_plan(page), DesignSystem())
        assert "Tom &amp; Jerry &lt;3" in html

    def test_photos_render_in_one_grid(self):
        page = Page(index=1, entries=[
            _entry("photo", 1, image="a.jpg", caption="Pie"),
            _entry("text", 2, text="between"),
            _entry("photo", 3, image="b.jpg"),
        ])
        html = render_html(_plan(page), DesignSystem())
        assert html.count('class="photo-grid"') == 1
        assert html.index("a.jpg") < html.index("b.jpg") < html.index("between")
        assert "<figcaption>Pie</figcaption>" in html

    def test_menu_and_full_page_photo(self):
        pages = [
            Page(index=1, entries=[_entry("menu", 1, image="menu.jpg", title="Menu 2024")]),
            Page(index=2, entries=[_entry("full_page_photo", 2, image="group.jpg")]),
        ]
        html = render_html(_plan(*pages), DesignSystem())
        assert "Menu 2024" in html
        assert 'src="menu.jpg"' in html
        assert 'src="group.jpg"' in html

    def test_blog_with_images(self):
        page = Page(index=1, entries=[_entry(
            "blog", 1, title="Football", body="We played *until dark*.",
            featured_image="yard.jpg", images=["ball.jpg"],
        )])
        html = render_html(_plan(page), DesignSystem())
        assert "Football" in html
        assert "<em>until dark</em>" in html
        assert 'src="yard.jpg"' in html
        assert 'src="ball.jpg"' in html

    def test_unknown_kind_renders_its_text(self):
        page = Page(index=1, entries=[_entry("sticker", 1, text="Gobble!")])
        html = render_html(_plan(page), DesignSystem())
        assert "Gobble!" in html

    def test_entry_without_payload_renders(self):
        page = Page(index=1, entries=[_entry("photo", 1), _entry("blog", 2), _entry("text", 3)])
        html = render_html(_plan(page), DesignSystem())
        assert 'data-entry="photo-1"' in html


# ---------------------------------------------------------------------------
# Output path
# ---------------------------------------------------------------------------

class TestOutputPath:
    def test_with_year(self, tmp_path):
        s = Settings(project_dir=tmp_path)
        path = _output_path(s, _plan(title="Family Thanksgiving", year=2024))
        assert path.name == "scrapbook_family_thanksgiving_2024.html"
        assert path.parent == s.output_dir

    def test_without_year(self, tmp_path):
        s = Settings(project_dir=tmp_path)
        assert _output_path(s, _plan(year=None)).name == "scrapbook_thanksgiving.html"

    def test_slugify(self):
        assert _slugify("Crème Brûlée & Piñata 2024") == "creme_brulee_pinata_2024"
        assert _slugify("Thanksgiving 🦃") == "thanksgiving"
        assert _slugify("") == "scrapbook"
        assert len(_slugify("a" * 60)) == 50


# ---------------------------------------------------------------------------
# run()
# ---------------------------------------------------------------------------

class TestRun:
    def test_writes_html(self, tmp_settings):
        path = run(tmp_settings, _cover_plan())
        assert path.exists()
        assert path.suffix == ".html"
        assert "Thanksgiving" in path.read_text(encoding="utf-8")

    def test_uses_design_yaml(self, tmp_settings):
        tmp_settings.design_yaml_path.write_text("colors:\n  background: '#123456'\n", encoding="utf-8")
        path = run(tmp_settings, _cover_plan())
        assert "#123456" in path.read_text(encoding="utf-8")

    def test_pdf_uses_weasyprint(self, tmp_settings):
        fake = MagicMock()
        with patch("pipeline.render._weasyprint", fake):
            path = run(tmp_settings, _cover_plan(), pdf=True)
        assert path.suffix == ".pdf"
        fake.HTML.return_value.write_pdf.assert_called_once_with(str(path))

    def test_pdf_without_weasyprint_raises(self, tmp_settings):
        with patch("pipeline.render._weasyprint", None):
            with pytest.raises(RuntimeError):
                run(tmp_settings, _cover_plan(), pdf=True)
