"""
Quick local test helper: runs the flood-fill pipeline on a local image and
writes an RGBA PNG to disk. This bypasses the API layer.
"""

from __future__ import annotations

import argparse
from pathlib import Path

# Ensure project root is importable when running from scripts/
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from floodfill_service import config
from floodfill_service.pipeline import remove_background_bytes


def parse_args() -> argparse.Namespace:
    settings = config.get_settings()
    parser = argparse.ArgumentParser(description="Remove the border background of a local image")
    parser.add_argument("--input", required=True, help="Path to the input image")
    parser.add_argument("--output", required=True, help="Path to write the RGBA PNG")
    parser.add_argument(
        "--tolerance",
        type=int,
        default=settings.default_tolerance,
        help="Background color tolerance (0 matches nothing)",
    )
    parser.add_argument("--feather-radius", type=int, default=None, help="Edge feather radius in pixels")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    input_path = Path(args.input)
    output_path = Path(args.output)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    image_bytes = input_path.read_bytes()
    result = remove_background_bytes(image_bytes, args.tolerance, feather_radius=args.feather_radius)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.png_bytes)
    width, height = result.size
    print(f"Wrote RGBA output to {output_path} ({width}x{height}, {result.masked_pixels} pixels removed)")


if __name__ == "__main__":
    main()
