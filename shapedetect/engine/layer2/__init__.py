"""Layer 2 — contour extraction, tracing, corners, simplification."""
