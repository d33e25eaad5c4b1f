#!/usr/bin/env python3
"""Validate a catalog export/import JSON file.
Exit non-zero if invalid."""
import sys, pathlib

ROOT = pathlib.Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from kiosk_admin.catalog import (  # noqa: E402
    CatalogParseError,
    CatalogValidationError,
    load_catalog_file,
    validate_snapshot,
)

path = pathlib.Path(sys.argv[1] if len(sys.argv) > 1 else "catalog.json")
if not path.exists():
    print(f"{path} missing", file=sys.stderr)
    sys.exit(1)
try:
    snapshot = load_catalog_file(path)
except CatalogParseError as e:
    print(f"JSON error: {e}", file=sys.stderr)
    sys.exit(2)
try:
    counts = validate_snapshot(snapshot)
except CatalogValidationError as e:
    for msg in e.errors:
        print(msg, file=sys.stderr)
    print(f"Validation failed with {len(e.errors)} error(s).", file=sys.stderr)
    sys.exit(5)
print(f"{path} valid: {counts}")
