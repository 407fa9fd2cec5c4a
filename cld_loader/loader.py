"""Entry points used by image renderers and metadata generators."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .config import CDN_HOST, ImageConfig
from .models import LoaderParams, SrcSetEntry
from .normalizer import normalize


def for_width(
    url: str,
    width: int,
    quality: Optional[int] = None,
    host: str = CDN_HOST,
) -> str:
    """Return a width-bound, format/quality-optimized variant of ``url``.

    ``quality`` is accepted to match the renderer's loader signature but is
    not written into the URL; the quality directive is always ``q_auto``.
    """
    return normalize(url, width=width, preserve_if_optimized=True, host=host)


def optimize(url: Optional[str], host: str = CDN_HOST) -> str:
    """Return ``url`` with ``f_auto/q_auto`` applied and no width constraint."""
    if not url:
        return ""
    return normalize(url, preserve_if_optimized=True, host=host)


def cloudinary_loader(params: LoaderParams) -> str:
    """Loader hook called by the responsive renderer once per display width."""
    return for_width(params.src, params.width, params.quality)


def image_widths(config: ImageConfig, width: Optional[int] = None) -> List[int]:
    """Pick the widths to request for an image.

    Without ``width`` every configured size is used (viewport-driven ``w``
    descriptors). With a fixed display width only the smallest sizes that
    cover 1x and 2x densities are returned.
    """
    sizes = config.all_sizes
    if width is None:
        return sizes
    if not sizes:
        return [width]
    picks: List[int] = []
    for target in (width, width * 2):
        candidate = next((size for size in sizes if size >= target), sizes[-1])
        if candidate not in picks:
            picks.append(candidate)
    return picks


def build_srcset(
    url: str,
    config: Optional[ImageConfig] = None,
    width: Optional[int] = None,
) -> List[SrcSetEntry]:
    config = config or ImageConfig()
    entries: List[SrcSetEntry] = []
    for index, size in enumerate(image_widths(config, width), start=1):
        descriptor = f"{size}w" if width is None else f"{index}x"
        entries.append(SrcSetEntry(url=for_width(url, size, host=config.cdn_host), descriptor=descriptor))
    return entries


def format_srcset(entries: Sequence[SrcSetEntry]) -> str:
    return ", ".join(str(entry) for entry in entries)
