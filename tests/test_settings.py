from pathlib import Path

import pytest
from pydantic import ValidationError

from settings import Settings


def test_settings_defaults():
    s = Settings()
    assert s.project_dir == Path("./data")
    assert s.page_height_budget == 820
    assert s.include_cover is True
    assert s.include_back_cover is False
    assert s.photo_share_per_page == 4
    assert s.safety_margin == 200
    assert s.base_padding == 100
    assert s.pair_blogs is False


def test_settings_derived_paths():
    s = Settings(project_dir=Path("/tmp/project"))
    assert s.journal_path == Path("/tmp/project/journal.json")
    assert s.template_dir == Path("/tmp/project/template")
    assert s.cache_dir == Path("/tmp/project/.cache")
    assert s.output_dir == Path("/tmp/project/output")
    assert s.design_yaml_path == Path("/tmp/project/template/design.yaml")


def test_page_height_budget_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(page_height_budget=0)


def test_photo_share_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(photo_share_per_page=0)


def test_margin_and_padding_must_not_be_negative():
    with pytest.raises(ValidationError):
        Settings(safety_margin=-1)
    with pytest.raises(ValidationError):
        Settings(base_padding=-10)


def test_zero_margin_and_padding_allowed():
    s = Settings(safety_margin=0, base_padding=0)
    assert s.safety_margin == 0
    assert s.base_padding == 0


def test_settings_env_prefix(monkeypatch):
    monkeypatch.setenv("SCRAPBOOK_PAGE_HEIGHT_BUDGET", "1000")
    monkeypatch.setenv("SCRAPBOOK_INCLUDE_COVER", "false")
    monkeypatch.setenv("SCRAPBOOK_PAIR_BLOGS", "true")
    s = Settings()
    assert s.page_height_budget == 1000
    assert s.include_cover is False
    assert s.pair_blogs is True
