"""
Palette definitions for Mandelbrot visualization.

A palette is a numpy array of shape (N, 3) with RGB values (uint8), where
N is the maximum iteration count. A pixel that escaped after `it`
iterations is drawn with palette[it]; pixels that never escape are drawn
with INTERIOR_COLOR and never index the palette.

To add a new palette:
1. Define a create_palette_xxx(n) function that returns the color array
2. Add it to the PALETTES dictionary at the bottom of this file
"""

import numpy as np


INTERIOR_COLOR = (0, 0, 0)

# Endpoints for the gradient palette as (hue, saturation, value), 0-1 range
GRADIENT_START_HSV = (0.66, 1.0, 0.35)  # Deep blue
GRADIENT_END_HSV = (0.10, 0.85, 1.0)    # Warm orange


def hsv_to_rgb(h, s, v):
    """Convert HSV (0-1 range) to RGB (0-255 range)."""
    if s == 0:
        r = g = b = int(v * 255)
        return (r, g, b)

    h = (h % 1.0) * 6
    i = int(h)
    f = h - i
    p = v * (1 - s)
    q = v * (1 - s * f)
    t = v * (1 - s * (1 - f))

    if i == 0:
        r, g, b = v, t, p
    elif i == 1:
        r, g, b = q, v, p
    elif i == 2:
        r, g, b = p, v, t
    elif i == 3:
        r, g, b = p, q, v
    elif i == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return (int(r * 255), int(g * 255), int(b * 255))


def create_palette_pseudo_random(n):
    """
    Pseudo-random palette: each channel is the index times a small odd
    multiplier, wrapped to a byte.

    Purely for visual variety between neighbouring iteration bands. The
    result depends only on n.
    """
    index = np.arange(n, dtype=np.int64)
    colors = np.empty((n, 3), dtype=np.uint8)
    colors[:, 0] = (index * 1337) % 256
    colors[:, 1] = (index * 173) % 256
    colors[:, 2] = (index * 6101) % 256
    return colors


def create_palette_gradient(n, start_hsv=GRADIENT_START_HSV, end_hsv=GRADIENT_END_HSV):
    """
    Gradient palette: linear interpolation in HSV space between two colors.

    Index 0 is start_hsv and index n - 1 is end_hsv. Hue is interpolated
    directly (no wrap-around shortest path).
    """
    colors = np.zeros((n, 3), dtype=np.uint8)
    h0, s0, v0 = start_hsv
    h1, s1, v1 = end_hsv
    for i in range(n):
        t = i / (n - 1) if n > 1 else 0.0
        # Weighted form so both endpoints are reproduced exactly
        colors[i] = hsv_to_rgb(
            h0 * (1 - t) + h1 * t,
            s0 * (1 - t) + s1 * t,
            v0 * (1 - t) + v1 * t,
        )
    return colors


# Registry of all available palette kinds.
# Keys are kind names, values are factory functions taking the size.
PALETTES = {
    'pseudo_random': create_palette_pseudo_random,
    'gradient': create_palette_gradient,
}


def create_palette(n, kind='pseudo_random', **options):
    """
    Build a palette of n colors.

    Args:
        n: Number of colors, normally the maximum iteration count
        kind: Key from PALETTES
        **options: Passed to the factory (e.g. start_hsv, end_hsv for 'gradient')

    Returns:
        Palette array (n, 3) of uint8 RGB values

    Raises:
        ValueError if n < 1 or kind is not registered
    """
    if n < 1:
        raise ValueError(f"Palette size must be at least 1, got {n}")
    try:
        factory = PALETTES[kind]
    except KeyError:
        raise ValueError(
            f"Unknown palette kind {kind!r}; expected one of {list_palette_names()}"
        ) from None
    return factory(n, **options)


def list_palette_names():
    """Get list of available palette kinds."""
    return list(PALETTES.keys())
