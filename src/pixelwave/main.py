# main.py
"""
Command-line entry point: pixelwave IMAGE [options]

Writes <image stem>.wav into the current directory (or --output).
Exit code 0 on success, 1 on any usage, format, decode, shape or write error.

Flow:
  check_extension -> read_image -> SonificationPipeline.run -> encode
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pixelwave.composer import SonificationPipeline
from pixelwave.config import (
    ORIENTATIONS,
    SIZING_DURATION,
    SIZING_FIXED,
    SIZING_HEURISTIC,
    WEIGHT_FLOOR,
    WEIGHT_MULTIPLY,
    SynthesisConfig,
)
from pixelwave.conversion import check_extension, read_image
from pixelwave.errors import PixelWaveError, UsageError


class _Parser(argparse.ArgumentParser):
    # argparse exits with 2 on bad arguments; route through UsageError instead
    def error(self, message):
        raise UsageError(f"{self.format_usage().strip()}\n{self.prog}: error: {message}")


def build_parser() -> argparse.ArgumentParser:
    defaults = SynthesisConfig()
    parser = _Parser(prog="pixelwave", description="Image -> mono 16-bit WAV by additive synthesis")
    parser.add_argument("image", help="Input image (png, jpg, bmp, gif, tiff, webp)")
    parser.add_argument("-o", "--output", help="Output WAV path (default: ./<image stem>.wav)")
    sizing = parser.add_mutually_exclusive_group()
    sizing.add_argument("--duration", type=float,
                        help=f"Total length in seconds before trimming (default {defaults.duration_s})")
    sizing.add_argument("--samples-per-row", type=int, help="Fixed number of samples per image row")
    sizing.add_argument("--heuristic", action="store_true",
                        help="Derive length from sqrt(rows * cols)")
    parser.add_argument("--min-freq", type=float, default=defaults.min_frequency,
                        help="Frequency of the first column in Hz")
    parser.add_argument("--max-freq", type=float, default=defaults.max_frequency,
                        help="Frequency of the last column in Hz")
    parser.add_argument("--alpha-floor", type=float, default=defaults.amplitude_floor,
                        help="Minimum alpha weight per pixel (0 disables)")
    parser.add_argument("--multiply-alpha", action="store_true",
                        help="Weight by alpha directly, ignoring --alpha-floor")
    parser.add_argument("--threshold", type=int, default=defaults.silence_threshold,
                        help="Silence threshold for trimming (0..32767)")
    parser.add_argument("--no-trim", action="store_true", help="Keep leading/trailing silence")
    parser.add_argument("--orientation", choices=ORIENTATIONS, default=defaults.orientation,
                        help="How the image is turned before scanning")
    parser.add_argument("--scale", type=int, default=defaults.scale,
                        help="Shrink the image by this integer factor first")
    parser.add_argument("--workers", type=int, default=defaults.workers,
                        help="Processes used to render rows")
    parser.add_argument("--require-alpha", action="store_true",
                        help="Fail unless the image has a transparency channel")
    return parser


def config_from_args(args: argparse.Namespace) -> SynthesisConfig:
    changes = {}
    if args.samples_per_row is not None:
        changes.update(sizing=SIZING_FIXED, samples_per_row=args.samples_per_row)
    elif args.heuristic:
        changes.update(sizing=SIZING_HEURISTIC)
    elif args.duration is not None:
        changes.update(sizing=SIZING_DURATION, duration_s=args.duration)
    return SynthesisConfig(
        min_frequency=args.min_freq,
        max_frequency=args.max_freq,
        amplitude_floor=args.alpha_floor,
        alpha_weighting=WEIGHT_MULTIPLY if args.multiply_alpha else WEIGHT_FLOOR,
        silence_threshold=args.threshold,
        trim_enabled=not args.no_trim,
        orientation=args.orientation,
        scale=args.scale,
        workers=args.workers,
        **changes,
    )


def output_path_for(image_path: str | Path) -> Path:
    return Path.cwd() / (Path(image_path).stem + ".wav")


def _print_progress(done: int, total: int) -> None:
    print(".", end="", flush=True)
    if done == total:
        print()


def run(argv: Optional[List[str]] = None) -> Path:
    args = build_parser().parse_args(argv)
    image_path = check_extension(args.image)
    config = config_from_args(args)
    out_path = Path(args.output) if args.output else output_path_for(image_path)

    print("Processing image..")
    image = read_image(image_path)
    print(f"Decoded {image_path}: {image.width}x{image.height}, {image.channels} channel(s)")

    pipeline = SonificationPipeline(config, progress=_print_progress, require_alpha=args.require_alpha)
    print("Generating WAV file...")
    try:
        samples = pipeline.run(image)
        rows, cols = pipeline.shape
        print(f"{rows} rows x {cols} columns -> {pipeline.raw_length} samples, {len(samples)} after trim")
        pipeline.encode(out_path, samples)
    except PixelWaveError as e:
        # same error kind, with the input and its size attached
        raise type(e)(f"{image_path} ({image.width}x{image.height}): {e}") from e
    return out_path


def main(argv: Optional[List[str]] = None) -> int:
    try:
        out_path = run(argv)
    except PixelWaveError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"WAV file generated: {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
