"""Video catalog data models."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from xsen_mcp.catalog.urls import extract_video_id

DEFAULT_TITLE = "OU Video"


class CatalogEntry(BaseModel):
    """A single video in the catalog, as published in videos.json."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    title: str = Field(
        default="",
        validation_alias=AliasChoices("OU Sooners videos", "title"),
        description="Video title",
    )
    description: str = Field(
        default="",
        validation_alias=AliasChoices("Description", "description"),
        description="Free-text description",
    )
    source_url: str = Field(
        default="",
        validation_alias=AliasChoices("URL", "url", "sourceUrl", "source_url"),
        description="YouTube URL of the video",
    )

    @field_validator("title", "description", "source_url", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        """videos.json is hand-edited; tolerate nulls and numbers."""
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def video_id(self) -> str:
        """Video id derived from `source_url`; empty when the URL is not recognized."""
        return extract_video_id(self.source_url)

    @property
    def display_title(self) -> str:
        return self.title or DEFAULT_TITLE


@dataclass(frozen=True)
class Catalog:
    """
    Immutable snapshot of the video catalog.

    A new instance is built for every successful load and published as a whole,
    so holding a reference guarantees a consistent view for the whole request.
    """

    entries: tuple[CatalogEntry, ...] = ()
    loaded_at: datetime | None = None
    version: int = 0

    @property
    def is_loaded(self) -> bool:
        return self.loaded_at is not None

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)


@dataclass(frozen=True)
class Match:
    """A catalog entry that matched a query, with its relevance score."""

    entry: CatalogEntry
    score: int


@dataclass(frozen=True)
class SearchResults:
    """Ordered matches for one query."""

    query: str
    matches: tuple[Match, ...] = field(default_factory=tuple)
    no_query: bool = False

    @classmethod
    def empty_query(cls) -> "SearchResults":
        """Sentinel returned when the query has no words to search for."""
        return cls(query="", matches=(), no_query=True)

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self) -> Iterator[Match]:
        return iter(self.matches)
