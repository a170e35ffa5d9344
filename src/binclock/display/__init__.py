"""Display rendering module.

Provides:
- Pure layout geometry for binary plots
- Pillow drawing helpers
- BinaryRenderer for line graph, dots and bar chart modes
"""

from .geometry import Rect
from .graphics import apply_rounded_corners
from .renderer import FOOTPRINTS, BinaryRenderer, footprint

__all__ = [
    "Rect",
    "apply_rounded_corners",
    "FOOTPRINTS",
    "BinaryRenderer",
    "footprint",
]
