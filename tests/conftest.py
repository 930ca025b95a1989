"""Root test configuration: shared Quiver library and settings fixtures"""

import pytest

from library_builder import add_note, add_notebook
from qvmd.config import Settings


@pytest.fixture(name="library")
def library_fixture(tmp_path):
    """A small library: two notebooks with notes, one empty notebook."""
    lib = tmp_path / "Quiver.qvlibrary"
    dev = add_notebook(lib, "A", "Dev/Notes")
    add_note(dev, "N1", "Hello", [
        {"type": "markdown", "data": "# Hi"},
        {"type": "code", "language": "js", "data": "1+1"},
    ], meta={"updated_at": 1700000000, "tags": ["a", "b"]})

    inbox = add_notebook(lib, "B", "Inbox")
    add_note(inbox, "N2", "Second: note", [
        {"type": "text", "data": "<h1>Title</h1><p>Some <b>bold</b> text</p>"},
        {"type": "latex", "data": "x^2"},
    ], meta={"updated_at": 1600000000, "tags": []})

    add_notebook(lib, "C", "Empty")
    return lib


@pytest.fixture(name="settings")
def settings_fixture(tmp_path):
    return Settings(output_base=str(tmp_path / "out"), max_workers=2)
