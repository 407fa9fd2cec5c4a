"""HTML rewriting so rendered markup points at optimized Cloudinary URLs."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .config import ImageConfig
from .loader import build_srcset, for_width, format_srcset, optimize
from .models import ImageCandidate, RewriteResult
from .utils import is_cdn_url

logger = logging.getLogger("cld_loader")

_PIXEL_PATTERN = re.compile(r"^\s*(\d+)(?:px)?\s*$")
_PREVIEW_META = {
    ("property", "og:image"),
    ("property", "og:image:url"),
    ("property", "og:image:secure_url"),
    ("name", "twitter:image"),
    ("itemprop", "image"),
}


def _pixel_width(value: Optional[str]) -> Optional[int]:
    """Parse ``width="640"`` or ``width="640px"``; anything else is ignored."""
    if not value:
        return None
    match = _PIXEL_PATTERN.match(value)
    if not match:
        return None
    width = int(match.group(1))
    return width or None


def _is_preview_meta(tag: Tag) -> bool:
    return any(tag.get(attr) == value for attr, value in _PREVIEW_META)


def _is_image_preload(tag: Tag) -> bool:
    rel = tag.get("rel") or []
    return "preload" in rel and tag.get("as") == "image"


def _rewrite_images(soup: BeautifulSoup, config: ImageConfig, width: Optional[int]) -> List[ImageCandidate]:
    rewritten: List[ImageCandidate] = []
    for img in soup.find_all("img"):
        src = img.get("src")
        if not is_cdn_url(src, config.cdn_host):
            continue
        display_width = width or _pixel_width(img.get("width"))
        if display_width:
            optimized = for_width(src, display_width, host=config.cdn_host)
        else:
            optimized = optimize(src, host=config.cdn_host)
        img["src"] = optimized
        if not img.get("srcset"):
            entries = build_srcset(src, config, display_width)
            if entries:
                img["srcset"] = format_srcset(entries)
        logger.debug("Rewrote <img> %s -> %s", src, optimized)
        rewritten.append(ImageCandidate(original_src=src, optimized_src=optimized, alt_text=img.get("alt", "")))
    return rewritten


def _rewrite_attribute(tag: Tag, attr: str, config: ImageConfig) -> Optional[ImageCandidate]:
    value = tag.get(attr)
    if not is_cdn_url(value, config.cdn_host):
        return None
    optimized = optimize(value, host=config.cdn_host)
    tag[attr] = optimized
    logger.debug("Rewrote <%s %s> %s -> %s", tag.name, attr, value, optimized)
    return ImageCandidate(original_src=value, optimized_src=optimized, alt_text="")


def rewrite_html(
    html: str,
    config: Optional[ImageConfig] = None,
    width: Optional[int] = None,
) -> RewriteResult:
    """Optimize Cloudinary references in ``<img>``, preview ``<meta>`` and preload ``<link>`` tags."""
    config = config or ImageConfig()
    soup = BeautifulSoup(html, "html.parser")

    images = _rewrite_images(soup, config, width)
    for meta in soup.find_all("meta"):
        if _is_preview_meta(meta):
            candidate = _rewrite_attribute(meta, "content", config)
            if candidate:
                images.append(candidate)
    for link in soup.find_all("link"):
        if _is_image_preload(link):
            candidate = _rewrite_attribute(link, "href", config)
            if candidate:
                images.append(candidate)

    logger.info("Rewrote %d Cloudinary image reference(s)", len(images))
    if not images:
        return RewriteResult(html=html)
    return RewriteResult(html=str(soup), images=images)
