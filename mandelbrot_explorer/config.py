"""Fixed configuration constants for the Mandelbrot explorer."""

# Window
WINDOW_TITLE = "Mandelbrot Explorer"
WINDOW_WIDTH = 1050
WINDOW_HEIGHT = 600
FRAMES_PER_SECOND = 60

# Computation
MAX_ITER = 1000
DEFAULT_PALETTE = "pseudo_random"

# Classic full-set framing: origin (x, y) and extent (width, height)
DEFAULT_VIEWPORT = (-2.5, -1.0, 3.5, 2.0)

# Navigation steps
PAN_STEP = 0.01   # Fraction of the extent per key press
ZOOM_STEP = 0.2   # Extent shrinks to 80% per zoom-in

# Animation export
EXPORT_ZOOM_STEP = 0.1
EXPORT_MAX_HEIGHT = 4.0       # Stop zooming out once the view is this tall
EXPORT_FRAME_DURATION_MS = 100
EXPORT_DIR = "."
EXPORT_FILE_TEMPLATE = "mandelbrot_{timestamp}.gif"
