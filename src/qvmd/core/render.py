"""Cell and frontmatter rendering: Quiver note parts -> Markdown text"""

import re
from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional

import yaml
from bs4 import BeautifulSoup
from markdownify import ATX, MarkdownConverter

from qvmd.core.models import CodeCell, EnrichedNote, MarkdownCell, OtherCell, TextCell


BLANK_RUN_RE = re.compile(r"\n{3,}")
CELL_SEPARATOR = "\n\n"

_converter = MarkdownConverter(heading_style=ATX, bullets="-", strip=["script", "style"])


def html_to_markdown(html: str) -> str:
    """Convert a rich-text HTML fragment to GitHub-flavoured Markdown."""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    # markdownify leaves runs of blank lines around block elements
    return BLANK_RUN_RE.sub("\n\n", _converter.convert_soup(soup)).strip()


def render_cell(cell) -> Optional[str]:
    """Render one cell to Markdown, or None for cell types with no rendering."""
    if isinstance(cell, CodeCell):
        return f"```{cell.language}\n{cell.data}\n```"
    if isinstance(cell, MarkdownCell):
        return cell.data
    if isinstance(cell, TextCell):
        return html_to_markdown(cell.data)
    if isinstance(cell, OtherCell):
        return None
    raise TypeError(f"Unsupported cell: {cell!r}")


def render_body(cells: Iterable) -> str:
    """Render cells in order and join the non-empty results with a blank line."""
    return CELL_SEPARATOR.join(text for text in map(render_cell, cells) if text)


def updated_date(timestamp: float) -> date:
    """Calendar date (UTC) of a Unix timestamp."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date()


def _scalar(value: Any) -> str:
    """Inline YAML for one scalar: plain when safe, quoted when YAML needs it."""
    text = yaml.safe_dump(value, allow_unicode=True, width=float("inf")).rstrip("\n")
    return text.removesuffix("\n...")


def _flow_item(value: Any) -> str:
    """Inline YAML for one item of a flow sequence, where commas and brackets need quoting."""
    text = yaml.safe_dump([value], default_flow_style=True, allow_unicode=True, width=float("inf"))
    return text.strip()[1:-1]


def render_frontmatter(note: EnrichedNote, layout: str) -> str:
    """Build the YAML frontmatter block for a note; metadata is required."""
    if note.metadata is None:
        raise ValueError(f"No meta.json for note '{note.title}' ({note.directory})")
    tags = ",".join(_flow_item(tag) for tag in note.metadata.tags)
    lines = [
        "---",
        f"title: {_scalar(note.title)}",
        f"category: {_scalar(note.notebook_folder)}",
        f"layout: {_scalar(layout)}",
        f"tags: [{tags}]",
        f"updated: {_scalar(updated_date(note.metadata.updated_at))}",
        "---",
    ]
    return "\n".join(lines) + "\n"


def render_note(note: EnrichedNote, layout: str) -> str:
    """Full Markdown document: frontmatter, a newline, then the body."""
    return f"{render_frontmatter(note, layout)}\n{render_body(note.cells)}"
