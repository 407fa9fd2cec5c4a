"""Directive normalization shared by every Cloudinary URL entry point."""

from __future__ import annotations

from typing import Optional

from .config import CDN_HOST, OPTIMIZED_PREFIX
from .directives import (
    CANONICAL_DIRECTIVES,
    serialize_directives,
    strip_directives,
    strip_version,
    trim_separators,
)
from .models import URLAnatomy
from .utils import is_cdn_url, split_upload


def _anatomize(base_prefix: str, after_upload: str, preserve_if_optimized: bool) -> URLAnatomy:
    if preserve_if_optimized and after_upload.startswith(OPTIMIZED_PREFIX):
        return URLAnatomy(
            base_prefix=base_prefix,
            asset_path=after_upload[len(OPTIMIZED_PREFIX):],
            directives=list(CANONICAL_DIRECTIVES),
            optimized=True,
        )
    # Only the version marker is positional; directive tokens go wherever they sit.
    remainder, version = strip_version(after_upload)
    remainder, directives = strip_directives(remainder)
    return URLAnatomy(
        base_prefix=base_prefix,
        asset_path=trim_separators(remainder),
        directives=directives,
        version_marker=version,
    )


def parse_url(
    url: str,
    host: str = CDN_HOST,
    preserve_if_optimized: bool = True,
) -> Optional[URLAnatomy]:
    """Break a Cloudinary URL into its parts; ``None`` for anything not transformable."""
    if not is_cdn_url(url, host):
        return None
    split = split_upload(url)
    if split is None:
        return None
    return _anatomize(*split, preserve_if_optimized)


def normalize(
    url: str,
    width: Optional[int] = None,
    preserve_if_optimized: bool = True,
    host: str = CDN_HOST,
) -> str:
    """Rewrite ``url`` into ``<base>[w_<width>/]f_auto/q_auto/<asset>``.

    URLs outside the CDN, or without an upload segment, come back unchanged.
    When ``preserve_if_optimized`` is set and the URL already starts with
    ``f_auto/q_auto/`` after the upload segment, it is returned as-is if no
    width is requested; otherwise only the width is put in front.
    """
    anatomy = parse_url(url, host, preserve_if_optimized)
    if anatomy is None:
        return url
    if anatomy.optimized and width is None:
        return url
    return anatomy.base_prefix + serialize_directives(width) + anatomy.asset_path
