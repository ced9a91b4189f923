"""
Viewport - maps the fixed base resolution onto the physical drawing surface
"""

from typing import Tuple

from .config import GAME_CONFIG


class Viewport:
    """Tracks physical size and the uniform scale factor relative to the base resolution"""

    def __init__(
        self,
        width: int,
        height: int,
        base_width: int = GAME_CONFIG["base_resolution"]["width"],
        base_height: int = GAME_CONFIG["base_resolution"]["height"],
    ):
        if base_width <= 0 or base_height <= 0:
            raise ValueError(f"Invalid base resolution: {base_width}x{base_height}")
        self.base_width = base_width
        self.base_height = base_height

        self.width = 0
        self.height = 0
        self.scale_x = 1.0
        self.scale_y = 1.0
        self.scale = 1.0
        self.resize(width, height)

    def resize(self, width: int, height: int) -> Tuple[int, int]:
        """Apply new physical dimensions. Returns the previous (width, height)."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid viewport size: {width}x{height}")

        # First sizing has nothing to remap from
        old_w = self.width if self.width > 0 else width
        old_h = self.height if self.height > 0 else height

        self.width = width
        self.height = height
        self.scale_x = width / self.base_width
        self.scale_y = height / self.base_height
        self.scale = min(self.scale_x, self.scale_y)
        return old_w, old_h

    def remap(self, x: float, y: float, old_w: float, old_h: float) -> Tuple[float, float]:
        """Move a point proportionally from an old size to the current one"""
        return x / old_w * self.width, y / old_h * self.height

    def __repr__(self):
        return (f"Viewport({self.width}x{self.height}, scale={self.scale:.3f}, "
                f"scale_x={self.scale_x:.3f}, scale_y={self.scale_y:.3f})")
