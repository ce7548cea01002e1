"""
Front/back matter and section assembly

Builds default matter for a new book and merges front matter, chapters and
back matter into the ordered section list the paginator consumes.
"""

from datetime import date
from typing import List, Optional

from kdp_formatter.models.book import (
    BackMatter,
    Chapter,
    FrontMatter,
    MatterSection,
    RenderableSection,
    SectionKind,
)

COPYRIGHT_TEMPLATE = (
    "Copyright © {year} {author}\n\n"
    "All rights reserved. No part of this publication may be reproduced, distributed, "
    "or transmitted in any form or by any means without the prior written permission "
    "of the publisher.\n\n"
    "Published by {author}\n\n"
    "First Edition"
)


def copyright_text(author: str, year: Optional[int] = None) -> str:
    return COPYRIGHT_TEMPLATE.format(year=year or date.today().year, author=author or "Author Name")


def default_front_matter(author: str, year: Optional[int] = None) -> FrontMatter:
    """Title and copyright pages on, dedication off. The title page is derived at assembly time."""
    return FrontMatter(
        title_page=MatterSection(kind=SectionKind.TITLE_PAGE, enabled=True, content=""),
        copyright_page=MatterSection(
            kind=SectionKind.COPYRIGHT_PAGE,
            enabled=True,
            content=copyright_text(author, year),
        ),
        dedication=MatterSection(
            kind=SectionKind.DEDICATION,
            enabled=False,
            content="For everyone who believed in this book.",
        ),
    )


def default_back_matter(author: str) -> BackMatter:
    return BackMatter(
        about_author=MatterSection(
            kind=SectionKind.ABOUT_AUTHOR,
            enabled=False,
            content=f"{author or 'The author'} is a writer and storyteller. Learn more at yourwebsite.com.",
        ),
        also_by=MatterSection(
            kind=SectionKind.ALSO_BY,
            enabled=False,
            content="Title of Another Book\nTitle of Yet Another Book",
        ),
        acknowledgments=MatterSection(
            kind=SectionKind.ACKNOWLEDGMENTS,
            enabled=False,
            content="I would like to thank everyone who helped make this book possible.",
        ),
    )


def assemble_sections(
    front_matter: FrontMatter,
    chapters: List[Chapter],
    back_matter: BackMatter,
    title: str,
    author: str,
) -> List[RenderableSection]:
    """
    Order enabled matter and chapters for pagination.

    Front matter never shows page numbers; chapters and back matter do.
    Disabled matter is left out entirely.
    """
    sections: List[RenderableSection] = []

    if front_matter.title_page.enabled:
        sections.append(RenderableSection(
            id="fm-title-page",
            kind=SectionKind.TITLE_PAGE,
            title=title or "Untitled",
            content=author,
            show_page_number=False,
        ))

    if front_matter.copyright_page.enabled:
        sections.append(RenderableSection(
            id="fm-copyright-page",
            kind=SectionKind.COPYRIGHT_PAGE,
            title="Copyright",
            content=front_matter.copyright_page.content,
            show_page_number=False,
        ))

    if front_matter.dedication.enabled:
        sections.append(RenderableSection(
            id="fm-dedication",
            kind=SectionKind.DEDICATION,
            title="Dedication",
            content=front_matter.dedication.content,
            show_page_number=False,
        ))

    for ch in chapters:
        sections.append(RenderableSection(
            id=ch.id,
            kind=SectionKind.CHAPTER,
            title=ch.title,
            content=ch.content,
            html_content=ch.html_content,
            style=ch.style,
            show_page_number=True,
        ))

    if back_matter.about_author.enabled:
        sections.append(RenderableSection(
            id="bm-about-author",
            kind=SectionKind.ABOUT_AUTHOR,
            title="About the Author",
            content=back_matter.about_author.content,
            show_page_number=True,
        ))

    if back_matter.also_by.enabled:
        sections.append(RenderableSection(
            id="bm-also-by",
            kind=SectionKind.ALSO_BY,
            title=f"Also by {author.strip() or 'the Author'}",
            content=back_matter.also_by.content,
            show_page_number=True,
        ))

    if back_matter.acknowledgments.enabled:
        sections.append(RenderableSection(
            id="bm-acknowledgments",
            kind=SectionKind.ACKNOWLEDGMENTS,
            title="Acknowledgments",
            content=back_matter.acknowledgments.content,
            show_page_number=True,
        ))

    return sections
