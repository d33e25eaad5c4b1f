"""Read & write catalog JSON (the export -> edit -> import workflow)."""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

from .models import CatalogParseError, CatalogSnapshot, COLLECTIONS

LOGGER = logging.getLogger(__name__)


def empty_catalog() -> Dict[str, Any]:
    return {name: [] for name in COLLECTIONS}


def parse_catalog_json(text: str) -> CatalogSnapshot:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogParseError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise CatalogParseError("Root must be an object")
    missing = [name for name in COLLECTIONS if not isinstance(data.get(name), list)]
    if missing:
        raise CatalogParseError(f"Missing/invalid arrays: {', '.join(missing)}")
    return CatalogSnapshot.from_dict(data)


def load_catalog_file(path: str | Path) -> CatalogSnapshot:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"catalog json not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        text = f.read()
    snapshot = parse_catalog_json(text)
    LOGGER.info("Loaded catalog from %s: %s", p, snapshot.counts())
    return snapshot


def dump_catalog(snapshot: CatalogSnapshot, path: Optional[str | Path] = None) -> str:
    """Serialize with 2-space indentation; also write to ``path`` when given."""
    text = json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False)
    if path is not None:
        p = Path(path)
        with p.open("w", encoding="utf-8") as f:
            f.write(text + "\n")
        LOGGER.info("Wrote catalog to %s", p)
    return text


__all__ = ["CatalogParseError", "empty_catalog", "parse_catalog_json", "load_catalog_file", "dump_catalog"]
