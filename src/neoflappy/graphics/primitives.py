"""Basic drawing primitives on numpy RGB buffers.

Every primitive clips to the buffer and only touches the bounding box of
the shape, so large playfields stay cheap.
"""

from typing import Tuple, Optional
import colorsys
import math

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def hsl(h: float, s: float, l: float) -> Color:
    """CSS-style hsl(): h in degrees, s and l in 0..1."""
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360.0, l, s)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


def vertical_gradient(buffer: Buffer, top: Color, bottom: Color) -> None:
    """Linear top-to-bottom gradient over the whole buffer."""
    h = buffer.shape[0]
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None]
    top_arr = np.array(top, dtype=np.float32)
    bottom_arr = np.array(bottom, dtype=np.float32)
    rows = top_arr + (bottom_arr - top_arr) * t
    buffer[:, :] = rows.astype(np.uint8)[:, None, :]


def _clip(buffer: Buffer, x1: float, y1: float, x2: float, y2: float) -> Optional[Tuple[int, int, int, int]]:
    h, w = buffer.shape[:2]
    ix1 = max(0, int(math.floor(x1)))
    iy1 = max(0, int(math.floor(y1)))
    ix2 = min(w, int(math.ceil(x2)))
    iy2 = min(h, int(math.ceil(y2)))
    if ix1 >= ix2 or iy1 >= iy2:
        return None
    return ix1, iy1, ix2, iy2


def _blend(region: NDArray, color: Color, alpha: float, mask: Optional[NDArray] = None) -> None:
    """Alpha-blend color over region (in place), optionally through a mask."""
    if alpha >= 1.0 and mask is None:
        region[:, :] = color
        return
    src = np.array(color, dtype=np.float32)
    dst = region.astype(np.float32)
    mixed = dst + (src - dst) * alpha
    if mask is None:
        region[:, :] = mixed.astype(np.uint8)
    else:
        region[mask] = mixed[mask].astype(np.uint8)


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw a filled axis-aligned rectangle, optionally translucent."""
    if alpha <= 0:
        return
    box = _clip(buffer, x, y, x + width, y + height)
    if box is None:
        return
    x1, y1, x2, y2 = box
    _blend(buffer[y1:y2, x1:x2], color, alpha)


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw a filled circle, optionally translucent."""
    box = _clip(buffer, cx - radius, cy - radius, cx + radius + 1, cy + radius + 1)
    if box is None or alpha <= 0:
        return
    x1, y1, x2, y2 = box
    ys, xs = np.ogrid[y1:y2, x1:x2]
    mask = (xs - cx) ** 2 + (ys - cy) ** 2 <= radius ** 2
    _blend(buffer[y1:y2, x1:x2], color, alpha, mask)


def draw_ring(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    thickness: float = 3.0,
    dashes: int = 0,
) -> None:
    """Draw a circle outline. With dashes > 0 the ring alternates on/off segments."""
    outer = radius + thickness / 2
    inner = radius - thickness / 2
    box = _clip(buffer, cx - outer, cy - outer, cx + outer + 1, cy + outer + 1)
    if box is None:
        return
    x1, y1, x2, y2 = box
    ys, xs = np.ogrid[y1:y2, x1:x2]
    dx = xs - cx
    dy = ys - cy
    dist_sq = dx ** 2 + dy ** 2
    mask = (dist_sq <= outer ** 2) & (dist_sq >= inner ** 2)
    if dashes > 0:
        angle = np.arctan2(dy, dx) + math.pi
        segment = (angle / (2 * math.pi) * dashes * 2).astype(int)
        mask &= (segment % 2) == 0
    buffer[y1:y2, x1:x2][mask] = color


def draw_rotated_rect(
    buffer: Buffer,
    cx: float,
    cy: float,
    width: float,
    height: float,
    angle_deg: float,
    color: Color,
    offset: Tuple[float, float] = (0.0, 0.0),
    alpha: float = 1.0,
) -> None:
    """Draw a rectangle in a frame rotated about (cx, cy).

    Args:
        cx, cy: Pivot of the rotated frame
        width, height: Rectangle size in the rotated frame
        angle_deg: Clockwise rotation in degrees (screen coordinates)
        offset: Rectangle center relative to the pivot, in the rotated frame
    """
    ox, oy = offset
    reach = math.hypot(abs(ox) + width / 2, abs(oy) + height / 2)
    box = _clip(buffer, cx - reach, cy - reach, cx + reach + 1, cy + reach + 1)
    if box is None or alpha <= 0:
        return
    x1, y1, x2, y2 = box
    ys, xs = np.mgrid[y1:y2, x1:x2]
    px = xs + 0.5 - cx
    py = ys + 0.5 - cy
    rad = math.radians(angle_deg)
    cos_a, sin_a = math.cos(rad), math.sin(rad)
    # Inverse rotation into the rectangle's frame
    u = px * cos_a + py * sin_a - ox
    v = -px * sin_a + py * cos_a - oy
    mask = (np.abs(u) <= width / 2) & (np.abs(v) <= height / 2)
    _blend(buffer[y1:y2, x1:x2], color, alpha, mask)


def draw_glyph(
    buffer: Buffer,
    glyph: Tuple[str, ...],
    cx: float,
    cy: float,
    scale: int,
    color: Color,
) -> None:
    """Draw a small bitmap glyph ('#' = lit) centered on (cx, cy)."""
    rows = len(glyph)
    cols = max(len(r) for r in glyph)
    left = cx - cols * scale / 2
    top = cy - rows * scale / 2
    for j, row in enumerate(glyph):
        for i, ch in enumerate(row):
            if ch == "#":
                draw_rect(buffer, left + i * scale, top + j * scale, scale, scale, color)
