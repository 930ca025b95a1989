"""Fragment, cell, and note models for the export pipeline"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Discriminator, Tag


class FragmentKind(str, Enum):
    """Role of a JSON file, decided by where it sits in the library tree"""
    notebook = "notebook"           # <dir>.qvnotebook/<any>.json
    note_meta = "note_meta"         # <dir>.qvnote/meta.json
    note_content = "note_content"   # <dir>.qvnote/content.json


@dataclass(frozen=True)
class RawFragment:
    """One parsed JSON file, tagged with its path and role; not persisted."""
    source_path: Path
    payload:     Any
    kind:        Optional[FragmentKind] = None


class NotebookDescriptor(BaseModel):
    name: str


class NoteMetadata(BaseModel):
    updated_at: float               # Unix seconds
    tags: list[str] = []


class CodeCell(BaseModel):
    type: Literal["code"] = "code"
    language: str = ""
    data: str = ""


class MarkdownCell(BaseModel):
    type: Literal["markdown"] = "markdown"
    data: str = ""


class TextCell(BaseModel):
    """Rich-text cell; data is an HTML fragment."""
    type: Literal["text"] = "text"
    data: str = ""


class OtherCell(BaseModel):
    """Any cell type without a Markdown rendering (latex, diagram, ...)."""
    type: Any = None


CELL_TYPES = ("code", "markdown", "text")


def _cell_tag(value: Any) -> str:
    """Route a raw or validated cell to its model; unknown types become 'other'."""
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return kind if kind in CELL_TYPES else "other"


Cell = Annotated[
    Union[
        Annotated[CodeCell, Tag("code")],
        Annotated[MarkdownCell, Tag("markdown")],
        Annotated[TextCell, Tag("text")],
        Annotated[OtherCell, Tag("other")],
    ],
    Discriminator(_cell_tag),
]


class NoteContent(BaseModel):
    title: str
    cells: list[Cell] = []


@dataclass
class EnrichedNote:
    """A note's content joined with its notebook folder and metadata."""
    source_path:     Path
    directory:       Path
    title:           str
    cells:           list = field(default_factory=list)
    notebook_folder: Optional[str] = None
    metadata:        Optional[NoteMetadata] = None


@dataclass
class ExportResult:
    """Summary of one export run."""
    output_dir: Path
    notes:      list[Path] = field(default_factory=list)
    categories: Optional[Path] = None
    collisions: list[Path] = field(default_factory=list)
