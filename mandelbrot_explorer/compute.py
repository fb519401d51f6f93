"""
Mandelbrot escape-time computation functions using Numba JIT compilation.

This module contains all the performance-critical functions. They are
JIT-compiled and pure, so they can be called from any number of threads:
- Escape-time iteration of z² + c with the squared-magnitude test
- Interior shortcuts (main cardioid and period-2 bulb)
- The pixel-center to complex-plane mapping shared by every renderer
- The parallel per-pixel escape-time map and palette application

Iteration count convention:
    The orbit is seeded at z₁ = c (the first step from z₀ = 0 always lands
    on c) and the escape test runs before every counted iteration. A point
    with |c| >= 2 therefore returns 0, and a point that never escapes
    returns max_iter.
"""

import numpy as np
from numba import jit, prange


ESCAPE_RADIUS_SQUARED = 4.0


@jit(nopython=True, cache=True)
def iterate_point(cr, ci, max_iter):
    """
    Count iterations of z² + c before the orbit leaves the radius-2 disk.

    Args:
        cr, ci: Real and imaginary parts of c
        max_iter: Iteration cap

    Returns:
        Iteration count in [0, max_iter]; max_iter means no escape.
    """
    zr = cr
    zi = ci
    iteration = 0
    while zr * zr + zi * zi < ESCAPE_RADIUS_SQUARED and iteration < max_iter:
        new_zr = zr * zr - zi * zi + cr
        zi = 2.0 * zr * zi + ci
        zr = new_zr
        iteration += 1
    return iteration


@jit(nopython=True, cache=True)
def in_main_cardioid(cr, ci):
    """Closed-form membership test for the main cardioid."""
    xr = cr - 0.25
    q = xr * xr + ci * ci
    return q * (q + xr) < 0.25 * ci * ci


@jit(nopython=True, cache=True)
def in_period2_bulb(cr, ci):
    """Closed-form membership test for the period-2 bulb centred at -1."""
    xr = cr + 1.0
    return xr * xr + ci * ci < 0.0625


@jit(nopython=True, cache=True)
def escape_time(cr, ci, max_iter, use_shortcuts=True):
    """
    Escape time of c with the interior shortcuts applied first.

    Points inside the cardioid or the period-2 bulb never escape, so they
    get max_iter without iterating. The result is identical to calling
    iterate_point directly.
    """
    if use_shortcuts and (in_main_cardioid(cr, ci) or in_period2_bulb(cr, ci)):
        return max_iter
    return iterate_point(cr, ci, max_iter)


@jit(nopython=True, cache=True)
def pixel_to_plane(px, py, x, y, width, height, buffer_width, buffer_height):
    """
    Map the center of pixel (px, py) into the complex plane.

    Args:
        px, py: Pixel column and row
        x, y: Plane coordinate of the buffer origin (pixel 0, 0)
        width, height: Plane extent covered by the buffer
        buffer_width, buffer_height: Buffer dimensions in pixels

    Returns:
        (cr, ci) tuple of float64
    """
    cr = x + (px + 0.5) / buffer_width * width
    ci = y + (py + 0.5) / buffer_height * height
    return cr, ci


@jit(nopython=True, parallel=True, cache=True)
def compute_escape_times(x, y, width, height, max_iter, out, use_shortcuts=True):
    """
    Fill an iteration buffer for the given plane region.

    Rows are distributed across Numba's thread pool; every pixel is written
    by exactly one worker and nothing is read back, so no locking is needed.

    Args:
        x, y: Plane coordinate of pixel (0, 0)
        width, height: Plane extent
        max_iter: Iteration cap
        out: int32 array of shape (rows, cols), modified in place
        use_shortcuts: Apply the cardioid/bulb tests before iterating
    """
    rows, cols = out.shape
    for py in prange(rows):
        for px in range(cols):
            cr, ci = pixel_to_plane(px, py, x, y, width, height, cols, rows)
            out[py, px] = escape_time(cr, ci, max_iter, use_shortcuts)


@jit(nopython=True, parallel=True, cache=True)
def apply_palette(iterations, max_iter, palette, out):
    """
    Color an iteration buffer with a palette lookup.

    Non-escaping pixels (iteration == max_iter) are painted black and never
    index the palette.

    Args:
        iterations: 2D int32 array from compute_escape_times
        max_iter: Iteration cap used for that computation
        palette: (N, 3) uint8 array with N >= max_iter
        out: Output RGB image array (rows, cols, 3), modified in place
    """
    rows, cols = iterations.shape
    for py in prange(rows):
        for px in range(cols):
            it = iterations[py, px]
            if it >= max_iter:
                out[py, px, 0] = 0
                out[py, px, 1] = 0
                out[py, px, 2] = 0
            else:
                out[py, px, 0] = palette[it, 0]
                out[py, px, 1] = palette[it, 1]
                out[py, px, 2] = palette[it, 2]


def warmup_jit(palette):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real frame.

    Args:
        palette: A palette array to use for warming up apply_palette
    """
    max_iter = min(10, palette.shape[0])
    iterations = np.zeros((10, 10), dtype=np.int32)
    compute_escape_times(-2.5, -1.0, 3.5, 2.0, max_iter, iterations, True)
    compute_escape_times(-2.5, -1.0, 3.5, 2.0, max_iter, iterations, False)
    apply_palette(iterations, max_iter, palette, np.zeros((10, 10, 3), dtype=np.uint8))
