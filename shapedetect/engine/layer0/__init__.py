"""Layer 0 — binarization."""
