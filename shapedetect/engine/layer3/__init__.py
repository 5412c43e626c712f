"""Layer 3 — geometric features."""
