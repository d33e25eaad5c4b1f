"""In-memory catalog editor.

Holds one snapshot fetched wholesale from the backend, applies local edits and
sends the whole snapshot back on save. Edits are validated before anything
reaches the network; a failed save leaves local state untouched so the caller
can retry.
"""

from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Union

from .ids import normalize_id, sorted_entities
from .models import (
    CatalogSnapshot,
    Category,
    Product,
    ModifierGroup,
    ModifierOption,
)
from .validator import CatalogValidationError, validate_group_rules, validate_snapshot

LOGGER = logging.getLogger(__name__)


class EditorBusyError(Exception):
    pass


class CatalogEditor:
    def __init__(self, backend=None):
        # backend: anything with export_catalog() and import_catalog(payload)
        self.backend = backend
        self.snapshot: Optional[CatalogSnapshot] = None
        self.dirty = False
        self.busy = False

    @contextmanager
    def _busy_gate(self, action: str):
        if self.busy:
            raise EditorBusyError(f"Cannot {action}: another request is in progress")
        self.busy = True
        try:
            yield
        finally:
            self.busy = False

    # --- loading --- #
    def load(self, data: Union[CatalogSnapshot, Dict[str, Any], None]) -> CatalogSnapshot:
        """Replace the in-memory snapshot. Backend data is trusted, not validated."""
        if isinstance(data, CatalogSnapshot):
            snapshot = data.copy()
        else:
            snapshot = CatalogSnapshot.from_dict(data)
        self.snapshot = snapshot
        self.dirty = False
        return snapshot

    def reload(self) -> CatalogSnapshot:
        if self.backend is None:
            raise ValueError("No backend configured for reload")
        with self._busy_gate("reload"):
            data = self.backend.export_catalog()
        snapshot = self.load(data)
        LOGGER.info("Loaded catalog from backend: %s", snapshot.counts())
        return snapshot

    # --- mutations --- #
    def _require_snapshot(self) -> CatalogSnapshot:
        if self.snapshot is None:
            # Starting from scratch is allowed; the first add creates an empty snapshot.
            self.snapshot = CatalogSnapshot()
        return self.snapshot

    @staticmethod
    def _require_id_and_name(kind: str, raw_id, name) -> tuple:
        entity_id = normalize_id(raw_id)
        clean_name = str(name or "").strip()
        if not entity_id:
            raise CatalogValidationError(f"{kind} id required")
        if not clean_name:
            raise CatalogValidationError(f"{kind} name required")
        return entity_id, clean_name

    def add_category(self, name: str, raw_id: str, sort: int = 0, image_url=None) -> Category:
        category_id, clean_name = self._require_id_and_name("Category", raw_id, name)
        snapshot = self._require_snapshot()
        if any(c.id == category_id for c in snapshot.categories):
            raise CatalogValidationError(f"Category id already exists: {category_id}")
        category = Category(
            id=category_id, name=clean_name, sort=int(sort or 0), image_url=image_url or None
        )
        snapshot.categories.append(category)
        self.dirty = True
        return category

    def add_product(
        self,
        name: str,
        raw_id: str,
        category_id: str,
        description: str = "",
        base_price_cents: int = 0,
        image_url: Optional[str] = None,
    ) -> Product:
        product_id, clean_name = self._require_id_and_name("Product", raw_id, name)
        snapshot = self._require_snapshot()
        if any(p.id == product_id for p in snapshot.products):
            raise CatalogValidationError(f"Product id already exists: {product_id}")
        product = Product(
            id=product_id,
            category_id=category_id,
            name=clean_name,
            description=description or "",
            base_price_cents=int(base_price_cents or 0),
            image_url=image_url or None,
        )
        snapshot.products.append(product)
        self.dirty = True
        return product

    def add_group(
        self,
        title: str,
        raw_id: str,
        product_id: str,
        required: bool = False,
        min_select: int = 0,
        max_select: int = 1,
        ui_type: str = "radio",
        sort: int = 0,
    ) -> ModifierGroup:
        group_id, clean_title = self._require_id_and_name("Modifier group", raw_id, title)
        problems = validate_group_rules(group_id, required, min_select, max_select, ui_type)
        if problems:
            raise CatalogValidationError(problems)
        snapshot = self._require_snapshot()
        if any(g.id == group_id for g in snapshot.modifier_groups):
            raise CatalogValidationError(f"Modifier group id already exists: {group_id}")
        group = ModifierGroup(
            id=group_id,
            product_id=product_id,
            title=clean_title,
            required=bool(required),
            min_select=int(min_select),
            max_select=int(max_select),
            ui_type=ui_type,
            sort=int(sort or 0),
        )
        snapshot.modifier_groups.append(group)
        self.dirty = True
        return group

    def add_option(
        self, name: str, raw_id: str, group_id: str, delta_cents: int = 0, sort: int = 0
    ) -> ModifierOption:
        option_id, clean_name = self._require_id_and_name("Modifier option", raw_id, name)
        snapshot = self._require_snapshot()
        if any(o.id == option_id for o in snapshot.modifier_options):
            raise CatalogValidationError(f"Modifier option id already exists: {option_id}")
        option = ModifierOption(
            id=option_id,
            group_id=group_id,
            name=clean_name,
            delta_cents=int(delta_cents or 0),
            sort=int(sort or 0),
        )
        snapshot.modifier_options.append(option)
        self.dirty = True
        return option

    # --- read views --- #
    def categories_sorted(self) -> List[Category]:
        return sorted_entities(self._require_snapshot().categories)

    def products_for(self, category_id: str) -> List[Product]:
        products = [p for p in self._require_snapshot().products if p.category_id == category_id]
        return sorted(products, key=lambda p: (p.name, p.id))

    def groups_for(self, product_id: str) -> List[ModifierGroup]:
        return sorted_entities(
            g for g in self._require_snapshot().modifier_groups if g.product_id == product_id
        )

    def options_for(self, group_id: str) -> List[ModifierOption]:
        return sorted_entities(
            o for o in self._require_snapshot().modifier_options if o.group_id == group_id
        )

    # --- validation & persistence --- #
    def validate(self) -> Dict[str, int]:
        return validate_snapshot(self.snapshot)

    def save(self) -> Dict[str, Any]:
        """Validate then send the whole snapshot to the backend.

        Validation errors block the call entirely. Backend errors propagate and
        leave the snapshot and dirty flag as they were.
        """
        if self.backend is None:
            raise ValueError("No backend configured for save")
        counts = self.validate()
        payload = self.snapshot.to_dict()
        with self._busy_gate("save"):
            result = self.backend.import_catalog(payload)
        self.dirty = False
        LOGGER.info("Catalog saved: %s", (result or {}).get("counts") or counts)
        return result or {}
