"""Unit tests for core/load.py"""

import pytest

from library_builder import write_json
from qvmd.config import Settings
from qvmd.core.load import classify, discover_files, load_fragments, read_fragment
from qvmd.core.models import FragmentKind


SETTINGS = Settings()


@pytest.mark.parametrize("rel,expected", [
    ("L.qvlibrary/A.qvnotebook/meta.json", FragmentKind.notebook),
    ("L.qvlibrary/A.qvnotebook/N.qvnote/meta.json", FragmentKind.note_meta),
    ("L.qvlibrary/A.qvnotebook/N.qvnote/content.json", FragmentKind.note_content),
    ("L.qvlibrary/A.qvnotebook/N.qvnote/other.json", None),
    ("L.qvlibrary/meta.json", None),
    ("L.qvlibrary/A.qvnotebook/N.qvnote/resources/x.json", None),
])
def test_classify_by_path(tmp_path, rel, expected):
    """classify derives the fragment role from the parent directory suffix and file name."""
    assert classify(tmp_path / rel, SETTINGS) == expected


def test_classify_custom_extensions(tmp_path):
    """classify honours configured notebook/note extensions."""
    settings = Settings(notebook_ext=".nb", note_ext=".note")
    assert classify(tmp_path / "x.nb" / "meta.json", settings) == FragmentKind.notebook
    assert classify(tmp_path / "x.nb" / "y.note" / "content.json", settings) == FragmentKind.note_content
    assert classify(tmp_path / "x.qvnotebook" / "meta.json", settings) is None


def test_discover_files_recursive_json_only(tmp_path):
    """discover_files returns sorted .json files at any depth and skips other files."""
    write_json(tmp_path / "b" / "deep" / "x.json", {})
    write_json(tmp_path / "a.json", {})
    (tmp_path / "notes.txt").write_text("text")
    assert discover_files(tmp_path) == [tmp_path / "a.json", tmp_path / "b" / "deep" / "x.json"]


def test_discover_files_missing_root(tmp_path):
    """discover_files raises RuntimeError for a root that is not a directory."""
    with pytest.raises(RuntimeError, match="not a directory"):
        discover_files(tmp_path / "missing")


def test_read_fragment_tags_path_and_kind(tmp_path):
    """read_fragment keeps the payload, source path, and role."""
    path = write_json(tmp_path / "A.qvnotebook" / "meta.json", {"name": "Dev"})
    frag = read_fragment(path, SETTINGS)
    assert frag.source_path == path
    assert frag.payload == {"name": "Dev"}
    assert frag.kind == FragmentKind.notebook


def test_read_fragment_malformed_json(tmp_path):
    """Malformed JSON raises RuntimeError naming the file."""
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(RuntimeError, match="bad.json"):
        read_fragment(path, SETTINGS)


def test_load_fragments_reads_whole_library(library):
    """load_fragments returns one fragment per JSON file in the library."""
    frags = load_fragments(library, Settings(max_workers=2))
    kinds = [f.kind for f in frags]
    assert len(frags) == 7
    assert kinds.count(FragmentKind.notebook) == 3
    assert kinds.count(FragmentKind.note_meta) == 2
    assert kinds.count(FragmentKind.note_content) == 2
    assert all(f.source_path.is_absolute() for f in frags)


def test_load_fragments_aborts_on_bad_file(library):
    """A single malformed file aborts the whole load."""
    (library / "broken.json").write_text("[1,")
    with pytest.raises(RuntimeError, match="broken.json"):
        load_fragments(library, SETTINGS)
