"""Configuration schema definitions using Pydantic for validation.

Settings can be given in snake_case or in the camelCase spelling used by
editor settings files (``fileTypes``, ``titleMaxLength``).
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WorkspaceConfig(BaseModel):
    """Settings for building the link graph of one workspace.

    Attributes:
        file_types: File extensions treated as documents (without dot).
        title_max_length: Titles longer than this are abbreviated (0 disables).
        exclude: Glob patterns of files and directories to skip.
        respect_gitignore: Whether patterns from the root .gitignore are skipped.
        alias_divider: Separator between page and label in ``[[page|label]]``.
        isolate_failures: Keep walking when a single file fails.
    """

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    file_types: List[str] = Field(default_factory=lambda: ["md"])
    title_max_length: int = Field(default=24, ge=0)
    exclude: List[str] = Field(default_factory=list)
    respect_gitignore: bool = True
    alias_divider: str = Field(default="|", min_length=1)
    isolate_failures: bool = False

    @field_validator("file_types")
    @classmethod
    def validate_file_types(cls, v: List[str]) -> List[str]:
        """Strip leading dots and reject empty extension lists."""
        cleaned = [ext.strip().lstrip(".") for ext in v]
        cleaned = [ext for ext in cleaned if ext]
        if not cleaned:
            raise ValueError("file_types must contain at least one extension")
        return cleaned

    @classmethod
    def default(cls) -> "WorkspaceConfig":
        return cls()

    def file_patterns(self) -> List[str]:
        """Glob patterns matching document file names."""
        return [f"*.{ext}" for ext in self.file_types]
