"""
Book data models for KDP Formatter

Defines manuscripts, chapters, front/back matter, layout sections and the
rendered pages produced by the pagination engine.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum


class PaperColor(str, Enum):
    """Interior paper stock"""
    WHITE = "white"
    CREAM = "cream"


class FontFamily(str, Enum):
    """Body font families supported by both renderers"""
    SERIF = "serif"
    SANS_SERIF = "sans-serif"
    MONOSPACE = "monospace"


class HeadingAlignment(str, Enum):
    """Chapter heading alignment"""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class SectionKind(str, Enum):
    """Kinds of renderable sections"""
    TITLE_PAGE = "title-page"
    COPYRIGHT_PAGE = "copyright-page"
    DEDICATION = "dedication"
    CHAPTER = "chapter"
    ABOUT_AUTHOR = "about-author"
    ALSO_BY = "also-by"
    ACKNOWLEDGMENTS = "acknowledgments"
    BLANK_PAGE = "blank-page"


class ChapterStartSide(str, Enum):
    """Which side of the spread a chapter must open on"""
    ANY = "any"
    LEFT = "left"
    RIGHT = "right"


FRONT_MATTER_KINDS = (
    SectionKind.TITLE_PAGE,
    SectionKind.COPYRIGHT_PAGE,
    SectionKind.DEDICATION,
)


class TrimSize(BaseModel):
    """Final cut page size, in inches"""
    label: str = Field(..., description="Display label, e.g. 6\" × 9\"")
    width: float = Field(..., gt=0, description="Width in inches")
    height: float = Field(..., gt=0, description="Height in inches")

    class Config:
        frozen = True


class Margins(BaseModel):
    """
    Page margins in inches.

    inside/outside are relative to the spine: on recto (odd) pages the
    inside margin is on the left, on verso (even) pages it is on the right.
    """
    top: float = Field(..., ge=0)
    bottom: float = Field(..., ge=0)
    inside: float = Field(..., ge=0, description="Gutter (spine side)")
    outside: float = Field(..., ge=0)

    class Config:
        frozen = True


class KDPSettings(BaseModel):
    """Physical and typographic settings for one book"""
    trim_size: TrimSize
    bleed: bool = False
    paper_color: PaperColor = PaperColor.WHITE
    font_size: float = Field(default=11.0, gt=0, description="Body font size in points")
    line_height: float = Field(default=1.5, gt=0, description="Line height multiplier")
    font_family: FontFamily = FontFamily.SERIF

    class Config:
        json_schema_extra = {
            "example": {
                "trim_size": {"label": "6\" × 9\"", "width": 6, "height": 9},
                "bleed": False,
                "paper_color": "cream",
                "font_size": 11,
                "line_height": 1.5,
                "font_family": "serif",
            }
        }


class ChapterStyle(BaseModel):
    heading_alignment: HeadingAlignment = HeadingAlignment.LEFT


class Chapter(BaseModel):
    """A chapter detected in (or edited from) the manuscript"""
    id: str = Field(..., description="Unique, stable chapter ID")
    title: str
    content: str = Field(default="", description="Plain text, paragraphs separated by blank lines")
    html_content: Optional[str] = Field(None, description="Opaque rich-text representation")
    style: Optional[ChapterStyle] = None


class MatterSection(BaseModel):
    """A front or back matter unit. Disabled sections keep their content."""
    kind: SectionKind
    enabled: bool = False
    content: str = ""


class FrontMatter(BaseModel):
    title_page: MatterSection
    copyright_page: MatterSection
    dedication: MatterSection


class BackMatter(BaseModel):
    about_author: MatterSection
    also_by: MatterSection
    acknowledgments: MatterSection


class RenderableSection(BaseModel):
    """Normalized unit consumed by the pagination engine"""
    id: str
    kind: SectionKind
    title: str
    content: str = ""
    html_content: Optional[str] = None
    style: Optional[ChapterStyle] = None
    show_page_number: bool = False


class RenderedLine(BaseModel):
    text: str
    is_title: bool = False
    line_index: int = 0

    class Config:
        frozen = True


class RenderedPage(BaseModel):
    """One physical page of the interior"""
    lines: List[RenderedLine] = Field(default_factory=list)
    page_number: int = Field(..., ge=1, description="1-based, monotonic across the document")
    section_id: str
    section_kind: SectionKind
    show_page_number: bool = False
    html_content: Optional[str] = None
    heading_alignment: Optional[HeadingAlignment] = None
    title: Optional[str] = None
    is_blank_page: bool = False

    class Config:
        frozen = True

    @property
    def is_recto(self) -> bool:
        """Odd pages are right-hand pages"""
        return self.page_number % 2 == 1


class BookProject(BaseModel):
    """Serialized project handed to the core by a storage collaborator"""
    id: str
    title: str = "Untitled Book"
    author_name: str = ""
    raw_text: str = ""
    chapters: List[Chapter] = Field(default_factory=list)
    settings: KDPSettings
    front_matter: FrontMatter
    back_matter: BackMatter
    updated_at: float = Field(default=0.0, description="Unix timestamp of the last edit")
