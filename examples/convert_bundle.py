"""Basic conversion example.

This example demonstrates how to:
- Convert a Resource Container checkout to a Scripture Burrito
- Display summary statistics
- Re-check the written ingredients
"""

import sys
from pathlib import Path

from rc2sb import ConversionError, ConversionPipeline
from rc2sb.sb import verify_ingredients


def main():
    # Change these to your RC checkout and output directory
    in_dir = Path.home() / "Door43" / "en_tn"
    out_dir = Path.home() / "Door43" / "en_tn_sb"

    if not (in_dir / "manifest.yaml").exists():
        print(f"No manifest.yaml in {in_dir}", file=sys.stderr)
        print("Please update the in_dir variable in this script", file=sys.stderr)
        return

    print(f"Converting: {in_dir}", file=sys.stderr)

    pipeline = ConversionPipeline()
    try:
        result = pipeline.convert(in_dir, out_dir)
    except ConversionError as e:
        print(f"Conversion failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"\n✓ Burrito written to {result.out_dir}", file=sys.stderr)
    print(f"  Subject: {result.subject}", file=sys.stderr)
    print(f"  Ingredients: {result.ingredients}", file=sys.stderr)

    total_size = sum(i["size"] for i in result.metadata["ingredients"].values())
    print(f"  Total size: {total_size / 1024**2:.1f} MB", file=sys.stderr)

    scope = result.metadata["type"]["flavorType"].get("currentScope", {})
    if scope:
        print(f"  Books: {', '.join(scope)}", file=sys.stderr)

    problems = verify_ingredients(result.metadata, result.out_dir)
    for problem in problems:
        print(f"  ! {problem}", file=sys.stderr)


if __name__ == '__main__':
    main()
