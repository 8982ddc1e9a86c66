from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    project_dir: Path = Path("./data")
    page_height_budget: int = 820
    include_cover: bool = True
    include_back_cover: bool = False
    photo_share_per_page: int = 4
    safety_margin: int = 200
    base_padding: int = 100
    pair_blogs: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SCRAPBOOK_",
        env_file_encoding="utf-8",
    )

    @field_validator("page_height_budget", "photo_share_per_page")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("page_height_budget and photo_share_per_page must be at least 1")
        return v

    @field_validator("safety_margin", "base_padding")
    @classmethod
    def must_not_be_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("safety_margin and base_padding must not be negative")
        return v

    @property
    def journal_path(self) -> Path:
        return self.project_dir / "journal.json"

    @property
    def template_dir(self) -> Path:
        return self.project_dir / "template"

    @property
    def cache_dir(self) -> Path:
        return self.project_dir / ".cache"

    @property
    def output_dir(self) -> Path:
        return self.project_dir / "output"

    @property
    def design_yaml_path(self) -> Path:
        return self.template_dir / "design.yaml"
