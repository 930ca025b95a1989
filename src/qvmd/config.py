"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    source_root:   Optional[str] = Field(default=None, description="Quiver library (*.qvlibrary) to export")
    output_base:   str = Field(default="~/Documents", description="Base directory for the export folder")
    output_folder: str = Field(default="quiver-to-markdown", description="Export folder created under output_base")
    layout:        str = Field(default="2017/sheet", description="Frontmatter layout for every note")
    notebook_ext:  str = Field(default=".qvnotebook", pattern=r"^\.\w+$", description="Notebook directory suffix")
    note_ext:      str = Field(default=".qvnote",     pattern=r"^\.\w+$", description="Note directory suffix")
    max_workers:   int = Field(default=8, ge=1, description="Max files read or written concurrently")
    log_level:     str = Field(default="INFO", description="Root logging level")

    @property
    def output_dir(self) -> Path:
        """Directory the run owns: wiped and rebuilt on every export."""
        return Path(self.output_base).expanduser() / self.output_folder


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then QVMD_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"QVMD_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
