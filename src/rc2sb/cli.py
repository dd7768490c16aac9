"""Command-line interface for the RC to SB converter.

This module provides the ``rc2sb`` entry point, which converts one
Resource Container checkout into a Scripture Burrito directory.
"""

import argparse
import logging
import sys
from pathlib import Path

from .errors import ConversionError
from .pipeline import ConversionOptions, ConversionPipeline
from .registry import HandlerRegistry
from .sb.validator import verify_ingredients


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for ``rc2sb``."""
    parser = argparse.ArgumentParser(
        prog="rc2sb",
        description="Convert a Resource Container (RC) into a Scripture Burrito (SB)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a Translation Notes checkout
  rc2sb en_tn en_tn_sb

  # Bundle a Translation Words payload with a TWL conversion
  rc2sb --payload en_tw en_twl en_twl_sb

  # Take localized book names from a USFM Bible
  rc2sb --usfm hi_irv hi_tn hi_tn_sb
        """,
    )

    parser.add_argument("in_dir", nargs="?", type=Path, help="RC directory containing manifest.yaml")
    parser.add_argument("out_dir", nargs="?", type=Path, help="Output directory for the SB")

    parser.add_argument(
        "--payload",
        type=Path,
        metavar="DIR",
        help="Translation Words checkout to bundle with a TWL conversion",
    )
    parser.add_argument(
        "--usfm",
        type=Path,
        metavar="DIR",
        help="Directory of USFM files to read localized book names from",
    )
    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip JSON schema validation of the generated metadata",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Re-check every ingredient's size and checksum after writing",
    )
    parser.add_argument(
        "--list-subjects",
        action="store_true",
        help="List the supported RC subjects and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the converter."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    registry = HandlerRegistry.default()

    if args.list_subjects:
        for subject in registry.supported_subjects():
            print(subject)
        return

    if args.in_dir is None or args.out_dir is None:
        parser.error("the following arguments are required: in_dir, out_dir")

    # Validate input path
    if not args.in_dir.is_dir():
        print(f"Error: Input is not a directory: {args.in_dir}", file=sys.stderr)
        sys.exit(1)

    options = ConversionOptions(
        payload_path=args.payload,
        usfm_path=args.usfm,
        validate=not args.no_validate,
    )

    print(f"Converting {args.in_dir} -> {args.out_dir}", file=sys.stderr)
    try:
        result = ConversionPipeline(registry).convert(args.in_dir, args.out_dir, options)
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.verify:
        print("Verifying ingredients...", file=sys.stderr)
        problems = verify_ingredients(result.metadata, result.out_dir)
        if problems:
            print("Error: Ingredient verification failed:", file=sys.stderr)
            for problem in problems:
                print(f"  {problem}", file=sys.stderr)
            sys.exit(1)
        print("Verification successful!", file=sys.stderr)

    print(f"Converted {result.subject} ({result.identifier}) with {result.ingredients} ingredients")


if __name__ == "__main__":
    main()
