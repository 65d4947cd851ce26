"""Data models for metadata, parse results, and the parser state machines"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MetadataReadState(str, Enum):
    """Phase of the front-matter block; only ever moves forward"""
    not_started = "not_started"
    started = "started"
    finished = "finished"


class BlurbState(str, Enum):
    """Whether an explicit blurb has already been captured"""
    not_started = "not_started"
    started = "started"


class ListState(str, Enum):
    """Open/closed state of an ordered or unordered list container"""
    not_started = "not_started"     # closed
    started = "started"             # open


class Metadata(BaseModel):
    """Front-matter fields of a single document."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    publish_date: Optional[date] = Field(default_factory=date.today, alias="publishDate")
    blurb: str = ""


class AssetRequest(BaseModel):
    """A relative image reference that should be copied next to the generated page."""
    source: str


class ParsedDocument(BaseModel):
    html_body: str
    metadata: Metadata
    assets: list[AssetRequest] = []


@dataclass
class Post:
    """A parsed document bound to its source file; not persisted.

    rel_dir is the source directory relative to the content root; output
    mirrors it so posts and images from sibling directories never collide.
    """
    path:     Path
    slug:     str
    document: ParsedDocument
    rel_dir:  Path = Path(".")

    @property
    def href(self) -> str:
        """Page path relative to the output root, with forward slashes."""
        return (self.rel_dir / f"{self.slug}.html").as_posix()
