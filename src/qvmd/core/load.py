"""Fragment discovery and JSON loading for a Quiver library tree"""

import json
import logging
from pathlib import Path
from typing import Optional

from qvmd.config import Settings
from qvmd.core.models import FragmentKind, RawFragment
from qvmd.core.utils.pool import bounded_map


logger = logging.getLogger(__name__)

META_FILE = "meta.json"
CONTENT_FILE = "content.json"


def discover_files(root: Path) -> list[Path]:
    """Return sorted .json files at any depth under root."""
    if not root.is_dir():
        raise RuntimeError(f"Source root is not a directory: {root}")
    return sorted(p for p in root.rglob("*.json") if p.is_file())


def classify(path: Path, settings: Settings) -> Optional[FragmentKind]:
    """Decide a fragment's role from its file name and parent directory suffix."""
    parent = path.parent.suffix
    if parent == settings.notebook_ext:
        return FragmentKind.notebook
    if parent == settings.note_ext:
        if path.name == META_FILE:
            return FragmentKind.note_meta
        if path.name == CONTENT_FILE:
            return FragmentKind.note_content
    return None


def read_fragment(path: Path, settings: Settings) -> RawFragment:
    """Parse one JSON file into a RawFragment."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise RuntimeError(f"Failed to read {path}: {e}") from e
    return RawFragment(source_path=path, payload=payload, kind=classify(path, settings))


def load_fragments(root: Path, settings: Settings) -> list[RawFragment]:
    """Read every JSON file under root with bounded parallelism; any failure aborts."""
    files = discover_files(Path(root).expanduser().resolve())
    logger.info("Found %d JSON file(s) under %s", len(files), root)
    return bounded_map(lambda p: read_fragment(p, settings), files, settings.max_workers)
