"""Data models shared by the normalizer, loader and HTML rewriter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class URLAnatomy:
    """A Cloudinary delivery URL split around its upload marker."""

    base_prefix: str
    asset_path: str
    directives: List[str] = field(default_factory=list)
    version_marker: Optional[str] = None
    optimized: bool = False


@dataclass
class LoaderParams:
    """Parameters the image renderer passes for each requested width."""

    src: str
    width: int
    quality: Optional[int] = None


@dataclass
class SrcSetEntry:
    """One candidate in an ``srcset`` attribute."""

    url: str
    descriptor: str

    def __str__(self) -> str:
        return f"{self.url} {self.descriptor}"


@dataclass
class ImageCandidate:
    """Image reference found in markup together with its optimized form."""

    original_src: str
    optimized_src: str
    alt_text: str


@dataclass
class RewriteResult:
    """Rewritten markup and the images that were changed."""

    html: str
    images: List[ImageCandidate] = field(default_factory=list)
