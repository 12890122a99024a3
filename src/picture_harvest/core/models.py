# ABOUTME: Result models for a completed picture harvest
# ABOUTME: Summarizes pages, scanned records, and the distinct picture ids found

from pydantic import BaseModel, Field


class HarvestSummary(BaseModel):
    """Outcome of scanning one table to completion."""

    table_name: str = Field(description="Table that was scanned")
    pages: int = Field(default=0, ge=0, description="Pages fetched from the store")
    scanned_items: int = Field(default=0, ge=0, description="Records fetched across all pages")
    picture_references: int = Field(default=0, ge=0, description="Picture references seen, duplicates included")
    elapsed_seconds: float = Field(default=0.0, ge=0.0, description="Wall time of the scan")
    pictures: list[str] = Field(default_factory=list, description="Distinct picture ids, sorted")

    @property
    def picture_count(self) -> int:
        return len(self.pictures)
