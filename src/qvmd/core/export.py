"""Export: write one Markdown file per note and the Jekyll category manifest"""

from pathlib import Path

import yaml

from qvmd.core.models import EnrichedNote
from qvmd.core.render import render_note
from qvmd.core.utils.pool import bounded_map
from qvmd.core.utils.sanitize import sanitize_filename


CATEGORIES_FILE = "categories.yml"


def note_path(note: EnrichedNote, output_dir: Path) -> Path:
    """Return output_dir / <notebook folder> / <sanitized title>.md.

    Notes that belong to no notebook are placed directly under output_dir.
    """
    dest_dir = output_dir / note.notebook_folder if note.notebook_folder else output_dir
    return dest_dir / f"{sanitize_filename(note.title)}.md"


def write_note(note: EnrichedNote, output_dir: Path, layout: str) -> Path:
    """Render and write a single note. Overwrites any existing file at the same path."""
    contents = render_note(note, layout)
    path = note_path(note, output_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    return path


def latest_per_path(notes: list[EnrichedNote], output_dir: Path) -> list[EnrichedNote]:
    """Keep one note per output path: the last one in input order."""
    latest = {note_path(n, output_dir): n for n in notes}
    return list(latest.values())


def write_notes(
    notes: list[EnrichedNote],
    output_dir: Path,
    layout: str,
    max_workers: int = 8,
    ) -> list[Path]:
    """Write notes with bounded parallelism. Returns one path per distinct output file.

    When several notes share an output path only the last one is written, so no
    two workers ever write the same file.
    """
    unique = latest_per_path(notes, output_dir)
    return bounded_map(lambda n: write_note(n, output_dir, layout), unique, max_workers)


def collect_categories(notes: list[EnrichedNote]) -> list[str]:
    """Sorted distinct notebook folder names, skipping notes without one."""
    return sorted({n.notebook_folder for n in notes if n.notebook_folder})


def build_categories(notes: list[EnrichedNote]) -> str:
    """YAML manifest listing the categories for the site template."""
    manifest = {"enabled": True, "names": collect_categories(notes)}
    return yaml.safe_dump(manifest, default_flow_style=False, allow_unicode=True, sort_keys=False)


def write_categories(notes: list[EnrichedNote], output_dir: Path) -> Path:
    """Write categories.yml at the output root."""
    path = output_dir / CATEGORIES_FILE
    path.write_text(build_categories(notes), encoding="utf-8")
    return path
