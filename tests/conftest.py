from pathlib import Path

import pytest

from settings import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_PROJECT_DIR = FIXTURES_DIR / "sample_project"


@pytest.fixture
def sample_project_dir() -> Path:
    """Path to the minimal sample project used across the stage tests."""
    return SAMPLE_PROJECT_DIR


@pytest.fixture
def settings(sample_project_dir: Path) -> Settings:
    """Settings instance pointing at the sample project."""
    return Settings(project_dir=sample_project_dir)


@pytest.fixture
def tmp_settings(tmp_path: Path) -> Settings:
    """Settings instance pointing at a fresh temp directory for tests that write output.

    Directory layout mirrors the real project:
        data/journal.json   journal export of the web app
        data/template/      design system (design.yaml)
    """
    (tmp_path / "template").mkdir()
    return Settings(project_dir=tmp_path)
