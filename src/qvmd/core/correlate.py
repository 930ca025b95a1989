"""Join notebook, metadata, and content fragments into EnrichedNotes by directory"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from qvmd.config import Settings
from qvmd.core.models import (
    EnrichedNote, FragmentKind, NotebookDescriptor, NoteContent, NoteMetadata, RawFragment,
)
from qvmd.core.utils.sanitize import sanitize_filename


logger = logging.getLogger(__name__)


def _of_kind(fragments: Iterable[RawFragment], kind: FragmentKind) -> list[RawFragment]:
    return [f for f in fragments if f.kind == kind]


def folder_name(notebook_name: str) -> str:
    """Output folder for a notebook; slashes become hyphens so names never nest."""
    return sanitize_filename(notebook_name.replace("/", "-"))


def notebook_folders(fragments: Iterable[RawFragment]) -> dict[Path, str]:
    """Map each notebook directory to its sanitized output folder name."""
    folders = {}
    for frag in _of_kind(fragments, FragmentKind.notebook):
        descriptor = NotebookDescriptor.model_validate(frag.payload)
        folders[frag.source_path.parent] = folder_name(descriptor.name)
    return folders


def metadata_index(fragments: Iterable[RawFragment]) -> dict[Path, NoteMetadata]:
    """Map each note directory to its parsed meta.json."""
    return {
        frag.source_path.parent: NoteMetadata.model_validate(frag.payload)
        for frag in _of_kind(fragments, FragmentKind.note_meta)
    }


def notebook_root(path: Path, settings: Settings) -> Optional[Path]:
    """Return the nearest ancestor directory carrying the notebook extension."""
    for parent in path.parents:
        if parent.suffix == settings.notebook_ext:
            return parent
    return None


def enrich_notes(
    fragments: list[RawFragment],
    settings: Settings,
    folders: Optional[dict[Path, str]] = None,
    ) -> list[EnrichedNote]:
    """Attach notebook folder and metadata to every content fragment.

    Missing joins are left as None; the writer decides whether that is fatal.
    Pass folders when notebook_folders has already been computed.
    """
    if folders is None:
        folders = notebook_folders(fragments)
    meta = metadata_index(fragments)

    notes = []
    for frag in _of_kind(fragments, FragmentKind.note_content):
        content = NoteContent.model_validate(frag.payload)
        directory = frag.source_path.parent
        root = notebook_root(frag.source_path, settings)
        note = EnrichedNote(
            source_path=frag.source_path,
            directory=directory,
            title=content.title,
            cells=list(content.cells),
            notebook_folder=folders.get(root) if root else None,
            metadata=meta.get(directory),
        )
        if note.notebook_folder is None:
            logger.debug("No notebook for %s", frag.source_path)
        if note.metadata is None:
            logger.debug("No meta.json beside %s", frag.source_path)
        notes.append(note)
    return notes
