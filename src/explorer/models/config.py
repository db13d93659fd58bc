"""
Configuration data model for the Terminal File Explorer.

Configuration is assembled from command-line arguments only; nothing is read
from or written to disk.
"""

import logging
from typing import Dict, Any
from pydantic import BaseModel, Field, field_validator, model_validator


class ExplorerConfig(BaseModel):
    """
    Layout and scan policy for the explorer.

    Attributes:
        name_column_width: Display width of the Name column
        min_size_column_width: Floor for the computed Size column width
        size_column_padding: Columns added to the digit count of the largest file
        fixed_column_allowance: Width reserved for the type, date and border columns
        follow_symlinks: Classify symbolic links by their target instead of as "other"
        include_special_entries: List the "." and ".." entries
        color: Style directory names when the console supports it
        clear_screen: Clear the terminal before each interactive listing
        log_level: Logging level name for the diagnostic log on stderr
    """

    name_column_width: int = Field(40, ge=4, description="Width of the Name column")
    min_size_column_width: int = Field(10, gt=0, description="Minimum width of the Size column")
    size_column_padding: int = Field(6, ge=0, description="Padding added to the largest size's digit count")
    fixed_column_allowance: int = Field(40, gt=0, description="Width reserved for type, date and borders")
    follow_symlinks: bool = Field(True, description="Classify links by their target type")
    include_special_entries: bool = Field(True, description="List '.' and '..'")
    color: bool = Field(True, description="Style directory names")
    clear_screen: bool = Field(True, description="Clear the terminal before each listing")
    log_level: str = Field("WARNING", description="Logging level name")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and validate the logging level name."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level: {v}")
        return level

    @model_validator(mode='after')
    def validate_layout(self):
        """Validate that the table is wide enough for the header rows."""
        if self.name_column_width + self.min_size_column_width + self.fixed_column_allowance < 20:
            raise ValueError("Table width must be at least 20 columns")
        return self

    def get_log_level(self) -> int:
        """Get the numeric logging level."""
        return logging.getLevelName(self.log_level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExplorerConfig':
        """Create an ExplorerConfig instance from a dictionary."""
        return cls.model_validate(data)
