"""Per-store overrides of the global catalog.

Overrides are sparse: a store only carries entries for what it changes.
Missing entries inherit the global value and count as active.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .models import CatalogSnapshot, Product, ModifierOption

LOGGER = logging.getLogger(__name__)


def _optional_int(entry: Dict[str, Any], key: str) -> Optional[int]:
    value = entry.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer or null, got {value!r}")
    return value


def _active(entry: Dict[str, Any]) -> bool:
    value = entry.get("active", True)
    if not isinstance(value, bool):
        raise ValueError(f"active must be true or false, got {value!r}")
    return value


def _entries(data: Dict[str, Any], name: str, id_key: str) -> List[Dict[str, Any]]:
    """Entries of one override list; entries without an id are skipped."""
    entries = data.get(name) or []
    if not isinstance(entries, list):
        raise ValueError(f"{name} must be an array")
    kept = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"{name}[{idx}] is not an object")
        if not entry.get(id_key):
            LOGGER.warning("Skipping %s[%d]: no %s", name, idx, id_key)
            continue
        kept.append(entry)
    return kept


@dataclass
class CategoryOverride:
    category_id: str
    active: bool = True
    sort_override: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categoryId": self.category_id,
            "active": self.active,
            "sortOverride": self.sort_override,
        }


@dataclass
class ProductOverride:
    product_id: str
    active: bool = True
    price_cents_override: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productId": self.product_id,
            "active": self.active,
            "priceCentsOverride": self.price_cents_override,
        }


@dataclass
class OptionOverride:
    option_id: str
    active: bool = True
    delta_cents_override: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "optionId": self.option_id,
            "active": self.active,
            "deltaCentsOverride": self.delta_cents_override,
        }


@dataclass
class StoreOverrides:
    categories: List[CategoryOverride] = field(default_factory=list)
    products: List[ProductOverride] = field(default_factory=list)
    options: List[OptionOverride] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "StoreOverrides":
        """Build from the backend payload; raises ValueError on malformed entries."""
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError("overrides must be an object")
        return cls(
            categories=[
                CategoryOverride(
                    category_id=str(c["categoryId"]),
                    active=_active(c),
                    sort_override=_optional_int(c, "sortOverride"),
                )
                for c in _entries(data, "categories", "categoryId")
            ],
            products=[
                ProductOverride(
                    product_id=str(p["productId"]),
                    active=_active(p),
                    price_cents_override=_optional_int(p, "priceCentsOverride"),
                )
                for p in _entries(data, "products", "productId")
            ],
            options=[
                OptionOverride(
                    option_id=str(o["optionId"]),
                    active=_active(o),
                    delta_cents_override=_optional_int(o, "deltaCentsOverride"),
                )
                for o in _entries(data, "options", "optionId")
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categories": [c.to_dict() for c in self.categories],
            "products": [p.to_dict() for p in self.products],
            "options": [o.to_dict() for o in self.options],
        }

    # --- lookups --- #
    def category(self, category_id: str) -> Optional[CategoryOverride]:
        return next((c for c in self.categories if c.category_id == category_id), None)

    def product(self, product_id: str) -> Optional[ProductOverride]:
        return next((p for p in self.products if p.product_id == product_id), None)

    def option(self, option_id: str) -> Optional[OptionOverride]:
        return next((o for o in self.options if o.option_id == option_id), None)

    # --- upserts --- #
    def set_category_active(self, category_id: str, active: bool) -> CategoryOverride:
        entry = self.category(category_id)
        if entry is None:
            entry = CategoryOverride(category_id=category_id)
            self.categories.append(entry)
        entry.active = active
        return entry

    def set_product_active(self, product_id: str, active: bool) -> ProductOverride:
        entry = self.product(product_id)
        if entry is None:
            entry = ProductOverride(product_id=product_id)
            self.products.append(entry)
        entry.active = active
        return entry

    def set_product_price_override(self, product_id: str, cents: Optional[int]) -> ProductOverride:
        entry = self.product(product_id)
        if entry is None:
            entry = ProductOverride(product_id=product_id)
            self.products.append(entry)
        entry.price_cents_override = cents
        return entry

    def set_option_active(self, option_id: str, active: bool) -> OptionOverride:
        entry = self.option(option_id)
        if entry is None:
            entry = OptionOverride(option_id=option_id)
            self.options.append(entry)
        entry.active = active
        return entry

    def set_option_delta_override(self, option_id: str, cents: Optional[int]) -> OptionOverride:
        entry = self.option(option_id)
        if entry is None:
            entry = OptionOverride(option_id=option_id)
            self.options.append(entry)
        entry.delta_cents_override = cents
        return entry

    # --- resolution --- #
    def effective_category_active(self, category_id: str) -> bool:
        entry = self.category(category_id)
        return entry.active if entry else True

    def effective_product(self, product: Product) -> Product:
        entry = self.product(product.id)
        if entry is None:
            return replace(product)
        price = product.base_price_cents
        if entry.price_cents_override is not None:
            price = entry.price_cents_override
        return replace(product, active=product.active and entry.active, base_price_cents=price)

    def effective_option(self, option: ModifierOption) -> ModifierOption:
        entry = self.option(option.id)
        if entry is None:
            return replace(option)
        delta = option.delta_cents
        if entry.delta_cents_override is not None:
            delta = entry.delta_cents_override
        return replace(option, active=option.active and entry.active, delta_cents=delta)

    def unknown_references(self, snapshot: CatalogSnapshot) -> List[str]:
        category_ids = {c.id for c in snapshot.categories}
        product_ids = {p.id for p in snapshot.products}
        option_ids = {o.id for o in snapshot.modifier_options}
        problems = []
        problems += [
            f"category '{c.category_id}'" for c in self.categories if c.category_id not in category_ids
        ]
        problems += [
            f"product '{p.product_id}'" for p in self.products if p.product_id not in product_ids
        ]
        problems += [f"option '{o.option_id}'" for o in self.options if o.option_id not in option_ids]
        return problems
