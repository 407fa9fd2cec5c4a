"""Utility helpers for recognizing Cloudinary delivery URLs."""

from __future__ import annotations

from typing import Optional, Tuple

from .config import CDN_HOST, UPLOAD_MARKER


def is_cdn_url(value: Optional[str], host: str = CDN_HOST) -> bool:
    """True when ``value`` mentions the CDN host anywhere in the string."""
    return bool(value) and host in value


def split_upload(url: str, marker: str = UPLOAD_MARKER) -> Optional[Tuple[str, str]]:
    """Split ``url`` after the first upload marker, or return ``None`` if it has none."""
    index = url.find(marker)
    if index == -1:
        return None
    cut = index + len(marker)
    return url[:cut], url[cut:]
