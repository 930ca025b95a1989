"""Pipeline orchestration: load -> correlate -> clean -> write notes -> categories"""

import logging
import shutil
from collections import Counter
from datetime import datetime
from pathlib import Path

from qvmd.config import Settings
from qvmd.core.correlate import enrich_notes, notebook_folders
from qvmd.core.export import note_path, write_categories, write_notes
from qvmd.core.load import load_fragments
from qvmd.core.models import EnrichedNote, ExportResult


logger = logging.getLogger(__name__)


def clean_output(output_dir: Path) -> None:
    """Delete output_dir if present and recreate it empty."""
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True)


def create_notebook_folders(folders: dict[Path, str], output_dir: Path) -> list[Path]:
    """Create one output folder per notebook, including notebooks without notes."""
    created = []
    for name in sorted(set(folders.values())):
        if not name:
            continue
        path = output_dir / name
        path.mkdir(parents=True, exist_ok=True)
        created.append(path)
    return created


def find_collisions(notes: list[EnrichedNote], output_dir: Path) -> list[Path]:
    """Return output paths that more than one note maps to; the last write wins."""
    counts = Counter(note_path(n, output_dir) for n in notes)
    return sorted(p for p, c in counts.items() if c > 1)


def run_export(source_root: Path, settings: Settings) -> ExportResult:
    """Export a Quiver library to Markdown under settings.output_dir.

    Fail-fast: the first error in any stage propagates and the run stops,
    possibly leaving a partial output tree behind.
    """
    logger.info("%s: Quiver - running job", datetime.now().strftime("%Y-%m-%d %I:%M:%p"))
    output_dir = settings.output_dir

    fragments = load_fragments(Path(source_root), settings)
    folders = notebook_folders(fragments)
    notes = enrich_notes(fragments, settings, folders)
    logger.info("Correlated %d note(s) across %d notebook(s)", len(notes), len(folders))

    clean_output(output_dir)
    create_notebook_folders(folders, output_dir)

    collisions = find_collisions(notes, output_dir)
    for path in collisions:
        logger.warning("Several notes share the output file %s; only one is kept", path)

    written = write_notes(notes, output_dir, settings.layout, settings.max_workers)
    logger.info("Wrote %d note(s) to %s", len(written), output_dir)

    categories = write_categories(notes, output_dir)
    return ExportResult(output_dir=output_dir, notes=written, categories=categories, collisions=collisions)
