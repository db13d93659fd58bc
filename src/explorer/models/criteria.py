"""
Filter criteria data model for the Terminal File Explorer.

The criteria value is owned by the session layer and accumulates across user
commands until it is cleared. The listing core only ever reads it.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .entry import EntryKind


class FilterCriteria(BaseModel):
    """
    Composable inclusion rules applied to directory entries before rendering.

    Every bound is inclusive and an entry must satisfy all present bounds.
    ``None`` means unbounded. The sentinels used by older front ends are
    accepted on input: ``-1`` for a size bound and ``0`` for a timestamp bound
    both mean "unbounded".

    Attributes:
        min_size: Smallest accepted size in bytes
        max_size: Largest accepted size in bytes
        kind: Restrict to files or directories only
        min_modified_at: Earliest accepted modification time
        max_modified_at: Latest accepted modification time
        search_term: Case-insensitive substring of the entry name
    """

    model_config = ConfigDict(frozen=True)

    min_size: Optional[int] = Field(None, ge=0, description="Inclusive lower size bound")
    max_size: Optional[int] = Field(None, ge=0, description="Inclusive upper size bound")
    kind: Optional[EntryKind] = Field(None, description="File or directory restriction")
    min_modified_at: Optional[datetime] = Field(None, description="Inclusive lower time bound")
    max_modified_at: Optional[datetime] = Field(None, description="Inclusive upper time bound")
    search_term: Optional[str] = Field(None, description="Case-insensitive name substring")

    @field_validator('min_size', 'max_size', mode='before')
    @classmethod
    def validate_size_sentinel(cls, v):
        """Map the legacy -1 sentinel to an unbounded size."""
        if v == -1:
            return None
        return v

    @field_validator('min_modified_at', 'max_modified_at', mode='before')
    @classmethod
    def validate_time_sentinel(cls, v):
        """Map the legacy 0 sentinel to an unbounded time and accept epoch seconds."""
        if v is None or isinstance(v, datetime):
            return v
        if isinstance(v, (int, float)):
            if v == 0:
                return None
            try:
                return datetime.fromtimestamp(v)
            except (OverflowError, OSError, ValueError):
                raise ValueError(f"Invalid timestamp: {v}")
        return v

    @field_validator('kind', mode='before')
    @classmethod
    def validate_kind(cls, v) -> Optional[EntryKind]:
        """Accept enum values, kind names or the single letters f and d."""
        if v is None or v == '':
            return None
        if isinstance(v, str):
            letters = {'f': EntryKind.FILE, 'd': EntryKind.DIRECTORY}
            key = v.strip().lower()
            if key in letters:
                return letters[key]
            try:
                v = EntryKind(key)
            except ValueError:
                raise ValueError(f"Invalid kind filter: {v}")
        if v is EntryKind.OTHER:
            raise ValueError("Kind filter must be 'file' or 'directory'")
        return v

    @field_validator('search_term')
    @classmethod
    def validate_search_term(cls, v: Optional[str]) -> Optional[str]:
        """An empty search term means no search filter."""
        if not v:
            return None
        return v

    @model_validator(mode='after')
    def validate_ranges(self):
        """Validate that lower bounds do not exceed upper bounds."""
        if self.min_size is not None and self.max_size is not None:
            if self.min_size > self.max_size:
                raise ValueError("Minimum size must be <= maximum size")

        if self.min_modified_at is not None and self.max_modified_at is not None:
            if self.min_modified_at > self.max_modified_at:
                raise ValueError("Earliest modification time must be <= latest")

        return self

    @classmethod
    def cleared(cls) -> 'FilterCriteria':
        """Return the identity filter that accepts every entry."""
        return cls()

    def with_updates(self, **updates: Any) -> 'FilterCriteria':
        """Return a validated copy with the given fields replaced."""
        data = self.model_dump()
        data.update(updates)
        return FilterCriteria.model_validate(data)

    def is_active(self) -> bool:
        """Check if any criterion is set."""
        return any(value is not None for value in self.model_dump().values())

    def describe(self) -> str:
        """One-line summary of the active criteria."""
        parts: List[str] = []

        if self.kind is not None:
            parts.append(f"type={self.kind.label}")

        if self.min_size is not None or self.max_size is not None:
            low = self.min_size if self.min_size is not None else 0
            high = self.max_size if self.max_size is not None else '*'
            parts.append(f"size={low}-{high}")

        if self.min_modified_at is not None or self.max_modified_at is not None:
            low = self.min_modified_at.strftime('%Y-%m-%d %H:%M:%S') if self.min_modified_at else ''
            high = self.max_modified_at.strftime('%Y-%m-%d %H:%M:%S') if self.max_modified_at else ''
            parts.append(f"date={low}..{high}")

        if self.search_term is not None:
            parts.append(f"search='{self.search_term}'")

        return ' '.join(parts) if parts else 'none'

    def to_dict(self) -> Dict[str, Any]:
        """Convert criteria to dictionary representation."""
        data = self.model_dump()
        data['kind'] = self.kind.value if self.kind else None
        for key in ('min_modified_at', 'max_modified_at'):
            if data[key]:
                data[key] = data[key].isoformat()
        return data

    def __str__(self) -> str:
        return f"Filter: {self.describe()}"
