"""Design system model — typed representation of design.yaml.

Loaded once by the render stage. Page size is in CSS pixels so that it
lines up with the height budget the packer works with.
"""
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class PageDimensions(BaseModel):
    width_px: int = 600
    height_px: int = 820
    padding_px: int = 32


class ColorPalette(BaseModel):
    primary: str = "#7A4B2A"
    background: str = "#F5ECD7"
    cover: str = "#5B3A21"
    text: str = "#2B2118"
    caption: str = "#6B5B4B"


class TextStyle(BaseModel):
    font: str = "Georgia"
    size_pt: float = 11.0
    weight: Literal["normal", "bold", "italic"] = "normal"


class Typography(BaseModel):
    heading: TextStyle = Field(default_factory=lambda: TextStyle(size_pt=20.0, weight="bold"))
    body: TextStyle = Field(default_factory=TextStyle)
    caption: TextStyle = Field(default_factory=lambda: TextStyle(size_pt=9.0, weight="italic"))

    def get(self, style_ref: str) -> TextStyle:
        """Look up a TextStyle by key ('heading', 'body', 'caption').

        Falls back to body style for unknown keys.
        """
        return getattr(self, style_ref, self.body)


class CoverText(BaseModel):
    subtitle: str = "Our treasured memories in one book"
    back_title: str = "Thank You"
    decoration: str = "❦"


class DesignSystem(BaseModel):
    """Complete design system loaded from design.yaml.

    Provides defaults for every field so it is usable even when design.yaml
    is absent or partially specified.
    """
    page: PageDimensions = Field(default_factory=PageDimensions)
    colors: ColorPalette = Field(default_factory=ColorPalette)
    typography: Typography = Field(default_factory=Typography)
    cover: CoverText = Field(default_factory=CoverText)

    @classmethod
    def load(cls, path: Path) -> "DesignSystem":
        """Load from a YAML file. Missing fields use Pydantic defaults.

        Raises FileNotFoundError if path does not exist.
        """
        import yaml  # lazy — only needed at load time
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls.model_validate(data)

    @classmethod
    def load_or_default(cls, path: Path) -> "DesignSystem":
        """Load from path if it exists, otherwise return default design system."""
        if path.exists():
            return cls.load(path)
        return cls()
