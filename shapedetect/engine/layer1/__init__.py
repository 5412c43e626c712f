"""Layer 1 — component segmentation."""
