from __future__ import annotations

from pydantic import BaseModel, Field


class ArchiveReportForm(BaseModel):
    """Form fields accepted by the archive ingestion endpoint."""

    server: str = Field(..., description="Host server that recorded the archive")
    username: str = Field(..., description="Channel id")
    location: str = Field(..., description="Archive storage location")
    duration: float = Field(..., description="Archive duration in seconds")
    thumbnails: list[str] = Field(default_factory=list, description="Ordered thumbnail references")

    def to_form(self) -> list[tuple[str, str]]:
        """Encode as form pairs, one indexed `thumbnails[i]` entry per thumbnail."""
        duration = int(self.duration) if float(self.duration).is_integer() else self.duration
        pairs = [
            ("server", self.server),
            ("username", self.username),
            ("location", self.location),
            ("duration", str(duration)),
        ]
        pairs.extend((f"thumbnails[{i}]", thumb) for i, thumb in enumerate(self.thumbnails))
        return pairs


class ArchiveReportResult(BaseModel):
    ok: bool
    status_code: int | None = None
    body: str | None = None
    error: str | None = None
