"""Referential-integrity validation for catalog snapshots."""

from __future__ import annotations
from typing import List, Dict, Iterable, Optional

from .models import CatalogSnapshot, UI_TYPES


class CatalogValidationError(Exception):
    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))


def validate_group_rules(
    group_id: str, required: bool, min_select: int, max_select: int, ui_type: str
) -> List[str]:
    """Return the cardinality/ui problems of one modifier group (empty when fine)."""
    problems = []
    if max_select < min_select:
        problems.append(
            f"Modifier group '{group_id}': maxSelect ({max_select}) must be >= minSelect ({min_select})"
        )
    if required and min_select < 1:
        problems.append(f"Modifier group '{group_id}' is required so minSelect must be >= 1")
    if ui_type not in UI_TYPES:
        problems.append(
            f"Modifier group '{group_id}' has invalid uiType '{ui_type}' (expected radio or chips)"
        )
    return problems


def _duplicates(kind: str, ids: Iterable[str]) -> List[str]:
    seen = set()
    reported = set()
    problems = []
    for entity_id in ids:
        if entity_id in seen and entity_id not in reported:
            problems.append(f"Duplicate {kind} id: {entity_id}")
            reported.add(entity_id)
        seen.add(entity_id)
    return problems


def collect_errors(snapshot: CatalogSnapshot) -> List[str]:
    errors: List[str] = []
    errors += _duplicates("category", (c.id for c in snapshot.categories))
    errors += _duplicates("product", (p.id for p in snapshot.products))
    errors += _duplicates("modifier group", (g.id for g in snapshot.modifier_groups))
    errors += _duplicates("modifier option", (o.id for o in snapshot.modifier_options))

    category_ids = {c.id for c in snapshot.categories}
    product_ids = {p.id for p in snapshot.products}
    group_ids = {g.id for g in snapshot.modifier_groups}

    for product in snapshot.products:
        if product.category_id not in category_ids:
            errors.append(
                f"Product '{product.id}' references missing category '{product.category_id}'"
            )
    for group in snapshot.modifier_groups:
        if group.product_id not in product_ids:
            errors.append(
                f"Modifier group '{group.id}' references missing product '{group.product_id}'"
            )
        errors += validate_group_rules(
            group.id, group.required, group.min_select, group.max_select, group.ui_type
        )
    for option in snapshot.modifier_options:
        if option.group_id not in group_ids:
            errors.append(
                f"Modifier option '{option.id}' references missing modifier group '{option.group_id}'"
            )
    return errors


def validate_snapshot(snapshot: Optional[CatalogSnapshot]) -> Dict[str, int]:
    """Raise CatalogValidationError listing every violation; return counts otherwise."""
    if snapshot is None:
        raise CatalogValidationError("No catalog loaded")
    errors = collect_errors(snapshot)
    if errors:
        raise CatalogValidationError(errors)
    return snapshot.counts()
