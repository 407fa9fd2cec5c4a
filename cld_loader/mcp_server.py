"""MCP server exposing cld-loader URL tools."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .config import ImageConfig
from .content import rewrite_html as rewrite_markup
from .loader import build_srcset, for_width, format_srcset, optimize

logger = logging.getLogger("cld_loader.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="cld-loader")


def _require_positive(width: int) -> int:
    if width <= 0:
        raise ValueError(f"width must be a positive integer, got {width}")
    return width


@mcp.tool()
def optimize_url(url: str) -> str:
    """Apply f_auto/q_auto to a Cloudinary URL; other URLs are returned unchanged."""
    return optimize(url)


@mcp.tool()
def responsive_url(url: str, width: int, quality: Optional[int] = None) -> str:
    """Return the width-bound variant of a Cloudinary URL."""
    return for_width(url, _require_positive(width), quality)


@mcp.tool()
def srcset(url: str, width: Optional[int] = None) -> str:
    """Build an srcset value using the default image size configuration."""
    if width is not None:
        _require_positive(width)
    return format_srcset(build_srcset(url, ImageConfig(), width=width))


@mcp.tool()
def rewrite_html(path: str) -> str:
    """Rewrite Cloudinary image references in an HTML file and return the markup."""
    source = Path(path).expanduser()
    if not source.exists():
        raise FileNotFoundError(f"HTML path does not exist: {source}")
    return rewrite_markup(source.read_text(encoding="utf-8")).html


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
