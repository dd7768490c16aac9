"""Translation Words Links with a bundled payload.

This example demonstrates how to:
- Bundle a Translation Words checkout into a TWL burrito
- Cancel a long conversion from another thread
- List the bundled articles
"""

import sys
import threading
from pathlib import Path

from rc2sb import ConversionCancelled, ConversionOptions, ConversionPipeline


def main():
    twl_dir = Path.home() / "Door43" / "en_twl"
    tw_dir = Path.home() / "Door43" / "en_tw"
    out_dir = Path.home() / "Door43" / "en_twl_sb"

    if not twl_dir.exists() or not tw_dir.exists():
        print("Please update the twl_dir and tw_dir variables in this script", file=sys.stderr)
        return

    options = ConversionOptions(payload_path=tw_dir)

    # Give up after five minutes
    cancel_event = threading.Event()
    timer = threading.Timer(300, cancel_event.set)
    timer.start()

    try:
        result = ConversionPipeline().convert(twl_dir, out_dir, options, cancel_event)
    except ConversionCancelled:
        print("Conversion cancelled", file=sys.stderr)
        sys.exit(1)
    finally:
        timer.cancel()

    payload = sorted(
        key for key in result.metadata["ingredients"] if key.startswith("ingredients/payload/")
    )
    print(f"\n✓ {result.ingredients} ingredients, {len(payload)} payload articles", file=sys.stderr)
    for key in payload[:10]:
        print(f"  {key}", file=sys.stderr)
    if len(payload) > 10:
        print(f"  ... and {len(payload) - 10} more", file=sys.stderr)


if __name__ == '__main__':
    main()
