"""Tokenizer for Cloudinary transformation directives.

A delivery path such as ``v1700000000/w_300,q_80,f_jpg/folder/sample.jpg``
is split on ``/`` and ``,`` into tokens. Each token that is followed by a
separator and matches one of the known directive grammars in full is
dropped; every other token keeps its original separator, so folders and the
public id survive verbatim.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Pattern, Tuple

SEPARATORS = ",/"
SEPARATOR_PATTERN = re.compile(r"([,/])")
VERSION_PATTERN = re.compile(r"^(v\d+)/")

DIRECTIVE_PATTERNS: Dict[str, Pattern[str]] = {
    "width": re.compile(r"w_\d+"),
    "height": re.compile(r"h_\d+"),
    "quality": re.compile(r"q_(?:auto|\d+)"),
    "format": re.compile(r"f_(?:auto|webp|avif|jpg|png)"),
    "crop": re.compile(r"c_(?:limit|fill|fit|scale|pad)"),
    "dpr": re.compile(r"dpr_(?:auto|\d+)"),
}

CANONICAL_DIRECTIVES = ("f_auto", "q_auto")


def classify_token(token: str) -> Optional[str]:
    """Return the directive kind for ``token`` or ``None`` when it is not one."""
    for kind, pattern in DIRECTIVE_PATTERNS.items():
        if pattern.fullmatch(token):
            return kind
    return None


def strip_version(path: str) -> Tuple[str, Optional[str]]:
    """Remove a leading ``v<digits>/`` segment."""
    match = VERSION_PATTERN.match(path)
    if not match:
        return path, None
    return path[match.end():], match.group(1)


def strip_directives(path: str) -> Tuple[str, List[str]]:
    """Drop recognized directive tokens, returning the remaining path and the removed tokens."""
    parts = SEPARATOR_PATTERN.split(path)
    kept: List[str] = []
    removed: List[str] = []
    # re.split with a capture group alternates token, separator, token, ...
    for index in range(0, len(parts), 2):
        token = parts[index]
        separator = parts[index + 1] if index + 1 < len(parts) else ""
        if separator and classify_token(token):
            removed.append(token)
            continue
        kept.append(token + separator)
    return "".join(kept), removed


def trim_separators(path: str) -> str:
    return path.strip(SEPARATORS)


def serialize_directives(width: Optional[int] = None) -> str:
    """Render the canonical directive segment, e.g. ``w_640/f_auto/q_auto/``."""
    tokens = list(CANONICAL_DIRECTIVES)
    if width is not None:
        tokens.insert(0, f"w_{width}")
    return "/".join(tokens) + "/"
