#!/usr/bin/env python
"""
Validate the sweet ideas catalog and print a summary.

Checks the same rules the bot enforces at startup (required fields,
unique ids, at least one idea) and warns when the catalog is getting small
enough that users will see repeats often.

Usage:
    python scripts/validate_catalog.py
    python scripts/validate_catalog.py --path my_ideas.yaml
    python scripts/validate_catalog.py --sample 3
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv(".env.local")

from core.catalog import CatalogError, load_catalog
from core.notifications.templates import render_reminder

# Below this, weekly users start seeing repeats within a few months
MIN_RECOMMENDED_IDEAS = 20


def main():
    parser = argparse.ArgumentParser(description="Validate the sweet ideas catalog")
    parser.add_argument(
        "--path",
        type=Path,
        help="Catalog file to check (default: CATALOG_PATH or the bundled catalog)",
    )
    parser.add_argument(
        "--sample",
        type=int,
        default=0,
        help="Render this many random ideas as they would be sent",
    )
    args = parser.parse_args()

    try:
        catalog = load_catalog(args.path)
    except CatalogError as e:
        print(f"✗ {e}")
        sys.exit(1)

    print(f"✓ Catalog version {catalog.version}: {len(catalog)} ideas")
    for category, count in sorted(catalog.categories().items()):
        print(f"  - {category.replace('_', ' ')}: {count}")

    if len(catalog) < MIN_RECOMMENDED_IDEAS:
        print(
            f"⚠ Only {len(catalog)} ideas, consider adding at least "
            f"{MIN_RECOMMENDED_IDEAS - len(catalog)} more"
        )

    for _ in range(args.sample):
        print("\n" + "-" * 40)
        print(render_reminder(catalog.sample()))


if __name__ == "__main__":
    main()
