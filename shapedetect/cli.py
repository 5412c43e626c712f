"""Command-line front end: decode image files and print detection results as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from shapedetect.config import settings
from shapedetect.engine.config import DetectionConfig
from shapedetect.engine.detector import ShapeDetector
from shapedetect.errors import DetectionError, InvalidImageError
from shapedetect.imaging import load_image

logger = logging.getLogger("shapedetect.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shapedetect",
        description="Detect circles, triangles, rectangles, pentagons, stars and lines",
    )
    parser.add_argument("images", nargs="+", help="Image files (PNG, JPEG, ...)")
    parser.add_argument(
        "-t",
        "--threshold",
        type=float,
        default=None,
        help="Luminance threshold; darker pixels are foreground (default: settings)",
    )
    parser.add_argument("--indent", type=int, default=None, help="Pretty-print JSON")
    parser.add_argument("--log-level", default=settings.shapedetect_log_level, help="Logging level")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    threshold = args.threshold if args.threshold is not None else settings.luminance_threshold
    detector = ShapeDetector(DetectionConfig(luminance_threshold=float(threshold)))

    failures = 0
    for path in args.images:
        try:
            pixels, width, height = load_image(path, max_pixels=settings.max_image_pixels)
            result = detector.detect(pixels, width, height)
        except (OSError, InvalidImageError, DetectionError) as e:
            logger.error("%s: %s", path, e)
            failures += 1
            continue
        payload = {"file": path, **result.to_dict()}
        print(json.dumps(payload, indent=args.indent))

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
