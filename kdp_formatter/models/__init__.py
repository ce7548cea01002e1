"""Data models for KDP Formatter"""

from kdp_formatter.models.book import (
    BackMatter,
    BookProject,
    Chapter,
    ChapterStartSide,
    ChapterStyle,
    FontFamily,
    FrontMatter,
    HeadingAlignment,
    KDPSettings,
    Margins,
    MatterSection,
    PaperColor,
    RenderableSection,
    RenderedLine,
    RenderedPage,
    SectionKind,
    TrimSize,
)

__all__ = [
    "BackMatter",
    "BookProject",
    "Chapter",
    "ChapterStartSide",
    "ChapterStyle",
    "FontFamily",
    "FrontMatter",
    "HeadingAlignment",
    "KDPSettings",
    "Margins",
    "MatterSection",
    "PaperColor",
    "RenderableSection",
    "RenderedLine",
    "RenderedPage",
    "SectionKind",
    "TrimSize",
]
