"""Filesystem domain types."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CopyOptions(BaseModel):
    copy_inside: bool = True  # Merge source contents into destination instead of nesting source/<name>
    overwrite: bool = True
    skip_exist: bool = False  # Only consulted when overwrite is off
    depth: int = Field(default=0, ge=0)  # 0 = unlimited


class AllowedRoot(BaseModel):
    path: str  # Absolute path or ~ for home
    allow_write: bool = False
    description: str | None = None


class FsScope(BaseModel):
    allowed_roots: list[AllowedRoot]
    blocked_patterns: list[str] = Field(default_factory=list)
