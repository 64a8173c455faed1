"""Markdown rendering for the generated index and tag pages."""

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from til.core.models import Page
from til.core.tag_map import TagMap

DEFAULT_ATTRIBUTION = "<a href='https://github.com/senorprogrammer/til'>til</a>"

templates_path = Path(__file__).parent.parent / "templates"


def pages_to_list(pages: Iterable[Page]) -> str:
    """Render content pages as a bulleted link list.

    A blank line is emitted whenever the creation month changes from the
    previous content page, so the list opens with one unless the first
    page has no date. Pages without a title are skipped entirely.
    """
    lines: list[str] = []
    prev_month: int | None = None
    for page in pages:
        if not page.is_content_page:
            continue
        if page.created_month != prev_month:
            lines.append("\n")
        lines.append(f"* {page.link()}\n")
        prev_month = page.created_month
    return "".join(lines)


def tag_links(tag_map: TagMap) -> str:
    """Comma-separated links to every tag page, in tag name order."""
    links = []
    for name in tag_map.sorted_tag_names():
        tags = tag_map.get(name)
        if tags:
            links.append(tags[0].link())
    return ", ".join(links)


def footer(now: datetime, attribution: str = DEFAULT_ATTRIBUTION) -> str:
    """Generation stamp appended to every generated page."""
    stamp = f"{now.day} {now:%b %Y %H:%M:%S}"
    return f"<sup><sub>generated {stamp} by {attribution}</sub></sup>"


class Renderer:
    """Renders generated pages from the bundled Jinja2 templates."""

    def __init__(self, attribution: str = DEFAULT_ATTRIBUTION, templates_dir: Path = templates_path):
        self.attribution = attribution
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            autoescape=False,
        )

    def render_tag_page(self, tag_name: str, tag_map: TagMap, now: datetime) -> str:
        template = self.env.get_template("tag.md.j2")
        return template.render(
            tag_name=tag_name,
            page_list=pages_to_list(tag_map.pages_for(tag_name)),
            footer=footer(now, self.attribution),
        )

    def render_index_page(self, pages: Iterable[Page], tag_map: TagMap, now: datetime) -> str:
        template = self.env.get_template("index.md.j2")
        return template.render(
            tag_links=tag_links(tag_map),
            page_list=pages_to_list(pages),
            footer=footer(now, self.attribution),
        )
