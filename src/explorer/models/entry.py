"""
Directory entry data models for the Terminal File Explorer.

This module defines the per-entry metadata produced by a directory scan.
Entries are transient: they are read fresh on every scan and discarded once
the listing has been rendered.
"""

import stat
from typing import Dict, Any
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, field_validator


class EntryKind(Enum):
    """Enumeration of directory entry kinds."""
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"

    @classmethod
    def from_mode(cls, mode: int) -> 'EntryKind':
        """Classify a ``st_mode`` value."""
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISREG(mode):
            return cls.FILE
        return cls.OTHER

    @property
    def label(self) -> str:
        """One-word label shown in the Type column."""
        return self.value.capitalize()


class DirectoryEntry(BaseModel):
    """
    Metadata for a single named item within a directory.

    Attributes:
        name: Raw entry name, without any path prefix
        kind: File, directory or other (links, sockets, devices, ...)
        size: Byte count; always 0 for anything that is not a regular file
        modified_at: Last modification time, whole seconds, local time
    """

    name: str = Field(..., min_length=1, description="Raw entry name")
    kind: EntryKind = Field(..., description="Entry kind")
    size: int = Field(0, ge=0, description="Size in bytes")
    modified_at: datetime = Field(..., description="Last modification time")

    @field_validator('name', mode='before')
    @classmethod
    def validate_name(cls, v):
        """Replace undecodable bytes in filesystem names with U+FFFD."""
        if not isinstance(v, str):
            return v
        try:
            v.encode('utf-8')
        except UnicodeEncodeError:
            try:
                raw = v.encode('utf-8', 'surrogateescape')
            except UnicodeEncodeError:
                raw = v.encode('utf-8', 'surrogatepass')
            return raw.decode('utf-8', 'replace')
        return v

    @field_validator('kind', mode='before')
    @classmethod
    def validate_kind(cls, v) -> EntryKind:
        """Ensure kind is an EntryKind enum."""
        if isinstance(v, str):
            try:
                return EntryKind(v.lower())
            except ValueError:
                raise ValueError(f"Invalid entry kind: {v}")
        return v

    @field_validator('modified_at')
    @classmethod
    def validate_modified_at(cls, v: datetime) -> datetime:
        """Truncate the timestamp to seconds resolution."""
        return v.replace(microsecond=0)

    @classmethod
    def from_stat(cls, name: str, stat_result) -> 'DirectoryEntry':
        """Build an entry from an ``os.stat_result``."""
        kind = EntryKind.from_mode(stat_result.st_mode)
        return cls(
            name=name,
            kind=kind,
            size=stat_result.st_size if kind is EntryKind.FILE else 0,
            modified_at=datetime.fromtimestamp(int(stat_result.st_mtime)),
        )

    def is_directory(self) -> bool:
        """Check whether this entry is a directory."""
        return self.kind is EntryKind.DIRECTORY

    def is_file(self) -> bool:
        """Check whether this entry is a regular file."""
        return self.kind is EntryKind.FILE

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to dictionary representation."""
        data = self.model_dump()
        data['kind'] = self.kind.value
        data['modified_at'] = self.modified_at.isoformat()
        return data

    def __str__(self) -> str:
        return f"{self.name} | {self.kind.label} | {self.size} bytes"
