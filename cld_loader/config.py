"""Configuration objects and constants for Cloudinary URL handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

CDN_HOST = "res.cloudinary.com"
UPLOAD_MARKER = "/upload/"
OPTIMIZED_PREFIX = "f_auto/q_auto/"

DEFAULT_DEVICE_SIZES = [640, 750, 828, 1080, 1200, 1920, 2048, 3840]
DEFAULT_IMAGE_SIZES = [16, 32, 48, 64, 96, 128, 256, 384]
DEFAULT_QUALITIES = [75, 80]


@dataclass
class ImageConfig:
    """Settings the responsive image renderer uses to pick widths."""

    device_sizes: List[int] = field(default_factory=lambda: list(DEFAULT_DEVICE_SIZES))
    image_sizes: List[int] = field(default_factory=lambda: list(DEFAULT_IMAGE_SIZES))
    qualities: List[int] = field(default_factory=lambda: list(DEFAULT_QUALITIES))
    cdn_host: str = CDN_HOST

    @property
    def all_sizes(self) -> List[int]:
        return sorted(set(self.image_sizes) | set(self.device_sizes))

    def closest_quality(self, quality: Optional[int]) -> Optional[int]:
        """Return the allowed quality nearest to ``quality`` (ties favour the lower one)."""
        if quality is None or not self.qualities:
            return None
        return min(sorted(self.qualities), key=lambda allowed: abs(allowed - quality))
