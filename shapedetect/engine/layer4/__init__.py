"""Layer 4 — classification."""
