"""Pydantic models for module records extracted from source files."""

from pydantic import BaseModel, Field


class ModuleRecord(BaseModel):
    """Declared module identity and import references of one source file."""

    identity: str = Field(..., description="Declared package/namespace of the file")
    references: list[str] = Field(
        default_factory=list,
        description="Imported identifiers in file order, duplicates included",
    )
    file_path: str = Field(..., description="Path to the file relative to the scanned root")

    @property
    def import_count(self) -> int:
        """Number of import statements found in the file."""
        return len(self.references)
