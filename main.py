import logging
import os
from pathlib import Path
from typing import List, Optional, Set

import click
from pydantic import ValidationError

from kdp_formatter.config.defaults import PROFILES, default_settings
from kdp_formatter.config.sizes import SIZES, get_trim_size
from kdp_formatter.layout.paginator import pad_to_even
from kdp_formatter.models.book import BookProject, ChapterStartSide, FontFamily, PaperColor
from kdp_formatter.pipeline import build_book, new_project
from kdp_formatter.renderer.pdf_renderer import generate_interior_pdf
from kdp_formatter.renderer.preview import render_text_preview, write_preview
from kdp_formatter.text.chapter_splitter import extract_title_from_text
from kdp_formatter.text.extractor import ExtractionError, extract_text
from kdp_formatter.validator.kdp_validator import has_errors, validate_interior_pdf


def _resolve_blank_before(values: List[str], project: BookProject) -> Set[str]:
    """Chapter numbers (1-based) or section ids -> section ids."""
    ids: Set[str] = set()
    for value in values:
        if value.isdigit():
            index = int(value) - 1
            if not 0 <= index < len(project.chapters):
                raise click.BadParameter(f"No chapter {value}; the book has {len(project.chapters)}.", param_hint="--blank-before")
            ids.add(project.chapters[index].id)
        else:
            ids.add(value)
    return ids


def _echo_issues(issues) -> None:
    if not issues:
        click.echo("✅ No issues found.")
        return
    for iss in issues:
        click.echo(f"{iss.type.upper()} [{iss.category}]: {iss.message}")


@click.command(help="Format a manuscript (.txt, .md, .docx, .pdf) into a KDP print-ready interior PDF.")
@click.argument("manuscript", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--project", "project_path", type=click.Path(exists=True, dir_okay=False), default=None, help="Load a saved project JSON instead of a manuscript")
@click.option("--title", type=str, default=None, help="Book title (defaults to the first manuscript line or the file name)")
@click.option("--author", type=str, default="", show_default=True, help="Author name")
@click.option("--profile", type=click.Choice(list(PROFILES.keys())), default="standard", show_default=True, help="Base settings profile")
@click.option("--trim", type=click.Choice(list(SIZES.keys())), default=None, help="Trim size key, e.g. 6x9 (profile default: 6x9)")
@click.option("--bleed/--no-bleed", default=None, help="Enable bleed page size")
@click.option("--paper", type=click.Choice([p.value for p in PaperColor]), default=None, help="Paper color")
@click.option("--font", "font_family", type=click.Choice([f.value for f in FontFamily]), default=None, help="Body font family")
@click.option("--font-size", type=click.FloatRange(min=8, max=16), default=None, help="Body font size in points (8-16)")
@click.option("--line-height", type=click.FloatRange(min=1.0, max=3.0), default=None, help="Line height multiplier")
@click.option("--chapter-start", "chapter_start", type=click.Choice([s.value for s in ChapterStartSide]), default="any", show_default=True, help="Open chapters on the right (recto) or left (verso) page")
@click.option("--blank-before", "blank_before", multiple=True, help="Insert a blank page before this chapter (1-based number or section id). Repeatable.")
@click.option("--no-title-page", is_flag=True, default=False, help="Leave out the title page")
@click.option("--no-copyright", is_flag=True, default=False, help="Leave out the copyright page")
@click.option("--dedication", type=str, default=None, help="Dedication text (enables the dedication page)")
@click.option("--about-author", type=str, default=None, help="About the Author text (enables the section)")
@click.option("--also-by", type=str, default=None, help="Other titles, one per line (enables the section)")
@click.option("--acknowledgments", type=str, default=None, help="Acknowledgments text (enables the section)")
@click.option("--out", "out_path", type=str, default="outputs/interior.pdf", show_default=True, help="Output PDF path")
@click.option("--set-trimbox", "set_trimbox", is_flag=True, default=False, help="Write TrimBox/BleedBox on every page for prepress QA")
@click.option("--preview-dir", "preview_dir", type=str, default=None, help="Also write PNG page previews to this directory")
@click.option("--preview-pages", "preview_pages", type=click.IntRange(min=1), default=None, help="Limit PNG previews to the first N pages")
@click.option("--show-pages", "show_pages", type=click.IntRange(min=1), default=None, help="Print the first N pages as text")
@click.option("--save-project", "save_project", type=str, default=None, help="Save the project as JSON to this path")
@click.option("--validate-only", "validate_only", is_flag=True, default=False, help="Report layout issues without writing a PDF")
@click.option("--validate-pdf", "validate_pdf_path", type=click.Path(exists=True, dir_okay=False), default=None, help="Check an existing interior PDF against the selected settings and exit")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging")
def main(manuscript: Optional[str], project_path: Optional[str], title: Optional[str], author: str, profile: str, trim: Optional[str], bleed: Optional[bool], paper: Optional[str], font_family: Optional[str], font_size: Optional[float], line_height: Optional[float],
         chapter_start: str, blank_before: List[str], no_title_page: bool, no_copyright: bool, dedication: Optional[str], about_author: Optional[str], also_by: Optional[str], acknowledgments: Optional[str],
         out_path: str, set_trimbox: bool, preview_dir: Optional[str], preview_pages: Optional[int], show_pages: Optional[int], save_project: Optional[str], validate_only: bool, validate_pdf_path: Optional[str], verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Settings: project or profile, then explicit overrides
    try:
        if project_path:
            project = BookProject.model_validate_json(Path(project_path).read_text(encoding="utf-8"))
            settings = project.settings
        else:
            project = None
            settings = default_settings(profile)
    except ValidationError as e:
        click.echo(f"❌ Invalid project file {project_path}: {e}")
        raise SystemExit(1)

    overrides = {}
    if trim:
        overrides["trim_size"] = get_trim_size(trim)
    if bleed is not None:
        overrides["bleed"] = bleed
    if paper:
        overrides["paper_color"] = PaperColor(paper)
    if font_family:
        overrides["font_family"] = FontFamily(font_family)
    if font_size is not None:
        overrides["font_size"] = font_size
    if line_height is not None:
        overrides["line_height"] = line_height
    settings = settings.model_copy(update=overrides)

    # Validation mode
    if validate_pdf_path:
        report = validate_interior_pdf(validate_pdf_path, settings)
        click.echo(f"Validation for {validate_pdf_path} (trim={report.trim_label})")
        click.echo(f"Pages: {report.page_count}")
        click.echo(f"First page size: {report.page_size_pt[0]:.2f} x {report.page_size_pt[1]:.2f} pt")
        if not report.issues:
            click.echo("✅ No issues found.")
        for iss in report.issues:
            click.echo(f"{iss.level.upper()}: {iss.message}")
        if not report.ok:
            raise SystemExit(1)
        return

    if project is None:
        if not manuscript:
            raise click.UsageError("Provide a MANUSCRIPT file or --project.")
        try:
            text = extract_text(manuscript)
        except ExtractionError as e:
            click.echo(f"❌ {e}")
            raise SystemExit(1)
        book_title = title or extract_title_from_text(text) or Path(manuscript).stem
        project = new_project(text, title=book_title, author=author, settings=settings)
    else:
        project = project.model_copy(update={"settings": settings})
        if title:
            project = project.model_copy(update={"title": title})
        if author:
            project = project.model_copy(update={"author_name": author})

    # Matter toggles
    front = project.front_matter
    back = project.back_matter
    if no_title_page:
        front = front.model_copy(update={"title_page": front.title_page.model_copy(update={"enabled": False})})
    if no_copyright:
        front = front.model_copy(update={"copyright_page": front.copyright_page.model_copy(update={"enabled": False})})
    if dedication is not None:
        front = front.model_copy(update={"dedication": front.dedication.model_copy(update={"enabled": True, "content": dedication})})
    if about_author is not None:
        back = back.model_copy(update={"about_author": back.about_author.model_copy(update={"enabled": True, "content": about_author})})
    if also_by is not None:
        back = back.model_copy(update={"also_by": back.also_by.model_copy(update={"enabled": True, "content": also_by})})
    if acknowledgments is not None:
        back = back.model_copy(update={"acknowledgments": back.acknowledgments.model_copy(update={"enabled": True, "content": acknowledgments})})
    project = project.model_copy(update={"front_matter": front, "back_matter": back})

    layout = build_book(project, chapter_start, _resolve_blank_before(list(blank_before), project))

    m = layout.margins
    click.echo(f"Book: {project.title!r} by {project.author_name or 'unknown author'}")
    click.echo(f"Trim: {settings.trim_size.label}, bleed {'on' if settings.bleed else 'off'}, {settings.font_family.value} {settings.font_size:g}pt x {settings.line_height:g}")
    click.echo(f'Margins: top {m.top:g}", bottom {m.bottom:g}", inside {m.inside:g}", outside {m.outside:g}"')
    click.echo(f"Chapters: {len(project.chapters)}, estimated pages: {layout.estimated_page_count}, laid out pages: {len(layout.pages)}")
    _echo_issues(layout.issues)

    if save_project:
        save_dir = os.path.dirname(save_project)
        if save_dir:
            os.makedirs(save_dir, exist_ok=True)
        Path(save_project).write_text(project.model_dump_json(indent=2), encoding="utf-8")
        click.echo(f"✅ Saved project to {save_project}")

    if show_pages:
        for page in layout.pages[:show_pages]:
            click.echo(render_text_preview(page))

    if validate_only:
        if has_errors(layout.issues):
            raise SystemExit(1)
        return

    if not layout.pages:
        click.echo("❌ Nothing to typeset: the text block holds no lines with these margins and font size.")
        raise SystemExit(1)

    pages = pad_to_even(layout.pages)
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    generate_interior_pdf(
        pages,
        settings,
        layout.margins,
        out_path,
        book_title=project.title,
        author=project.author_name,
        set_trimbox=set_trimbox,
    )
    click.echo(f"✅ Generated {out_path} with {len(pages)} pages at trim {settings.trim_size.label}")

    if preview_dir:
        written = write_preview(pages, settings, layout.margins, preview_dir, limit=preview_pages)
        click.echo(f"✅ Wrote {len(written)} preview image(s) to {preview_dir}")


if __name__ == "__main__":
    main()
