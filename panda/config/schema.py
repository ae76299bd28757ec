# panda/config/schema.py
"""
Pydantic schema for the stored configuration.

Rules:
- Strict validation
- No unknown keys
- Directories may be left empty; run preconditions report that, not the schema
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SubdirectoryMode(str, Enum):
    INCLUDED = "included"
    EXCLUDED = "excluded"


class PandaConfig(BaseModel):
    source_directory: str = Field(default="", description="Root of the markdown tree")
    target_directory: str = Field(default="", description="Root of the PDF tree")
    pandoc_options: List[str] = Field(
        default_factory=list,
        description="Extra pandoc arguments, passed through unmodified",
    )
    subdirectories: List[str] = Field(
        default_factory=list,
        description="Path fragments used by the include/exclude filter",
    )
    subdirectory_mode: Optional[SubdirectoryMode] = Field(
        default=None,
        description="Whether 'subdirectories' are included or excluded",
    )
    pandoc_path: str = Field(default="pandoc", description="pandoc executable")
    pdf_engine: str = Field(default="tectonic", description="pandoc --pdf-engine value")
    extensions: List[str] = Field(default_factory=lambda: [".md"])

    model_config = ConfigDict(extra="forbid", use_enum_values=False)

    @field_validator("source_directory", "target_directory")
    @classmethod
    def _strip_trailing_separators(cls, value: str) -> str:
        value = value.strip()
        if len(value) > 1:
            value = value.rstrip("/\\") or value[0]
        return value

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: List[str]) -> List[str]:
        normalized = []
        for ext in value:
            ext = ext.strip()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        if not normalized:
            raise ValueError("at least one document extension is required")
        return normalized
