"""Catalog model, validation & JSON editing."""

from .ids import normalize_id, sorted_entities  # noqa: F401
from .models import (  # noqa: F401
    CatalogSnapshot,
    Category,
    Product,
    ModifierGroup,
    ModifierOption,
)
from .validator import CatalogValidationError, validate_snapshot  # noqa: F401
from .loader import CatalogParseError, parse_catalog_json, load_catalog_file, dump_catalog  # noqa: F401
from .editor import CatalogEditor, EditorBusyError  # noqa: F401
from .overrides import StoreOverrides  # noqa: F401

__all__ = [
    "normalize_id",
    "sorted_entities",
    "CatalogSnapshot",
    "Category",
    "Product",
    "ModifierGroup",
    "ModifierOption",
    "CatalogValidationError",
    "validate_snapshot",
    "CatalogParseError",
    "parse_catalog_json",
    "load_catalog_file",
    "dump_catalog",
    "CatalogEditor",
    "EditorBusyError",
    "StoreOverrides",
]
