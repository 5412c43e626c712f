"""Exceptions raised by the detection core."""

from __future__ import annotations


class InvalidImageError(ValueError):
    """Pixel buffer does not match its declared dimensions."""


class ImageTooLargeError(InvalidImageError):
    """Encoded image declares more pixels than the configured limit."""


class DetectionError(RuntimeError):
    """A pipeline stage failed; no partial result is produced."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{tid}: {msg}" for tid, msg in sorted(self.errors.items()))
        super().__init__(f"Detection failed: {detail}")
