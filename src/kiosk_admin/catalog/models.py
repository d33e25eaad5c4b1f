"""
Catalog models shared by the editor, validator and API client.

Field names are snake_case in Python; ``to_dict``/``from_dict`` use the
camelCase names of the backend's import/export payload. ``from_dict`` is
strict about value types: a wrongly typed field raises ``CatalogParseError``
rather than being coerced, and keys it does not know are carried in ``extra``
so that ``to_dict`` gives them back untouched.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

UI_TYPES = ("radio", "chips")

COLLECTIONS = ("categories", "products", "modifierGroups", "modifierOptions")


class CatalogParseError(Exception):
    pass


def _int_field(data: Dict[str, Any], key: str, kind: str, default: int = 0) -> int:
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise CatalogParseError(f"{kind} '{data.get('id', '')}': {key} must be an integer, got {value!r}")
    return value


def _bool_field(data: Dict[str, Any], key: str, kind: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise CatalogParseError(f"{kind} '{data.get('id', '')}': {key} must be true or false, got {value!r}")
    return value


def _entries(data: Dict[str, Any], name: str) -> List[Dict[str, Any]]:
    entries = data.get(name) or []
    if not isinstance(entries, list):
        raise CatalogParseError(f"{name} must be an array")
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise CatalogParseError(f"{name}[{idx}] is not an object")
    return entries


def _extra(data: Dict[str, Any], known) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


@dataclass
class Category:
    """Category model."""

    id: str = ""
    name: str = ""
    sort: int = 0
    image_url: Optional[str] = None
    active: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("id", "name", "sort", "imageUrl", "active")

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "id": self.id,
            "name": self.name,
            "sort": self.sort,
            "imageUrl": self.image_url,
            "active": self.active,
        }
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            sort=_int_field(data, "sort", "Category"),
            image_url=data.get("imageUrl"),
            active=_bool_field(data, "active", "Category", True),
            extra=_extra(data, cls.KEYS),
        )


@dataclass
class Product:
    """Product model."""

    id: str = ""
    category_id: str = ""
    name: str = ""
    description: str = ""
    base_price_cents: int = 0
    image_url: Optional[str] = None
    active: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("id", "categoryId", "name", "description", "basePriceCents", "imageUrl", "active")

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "id": self.id,
            "categoryId": self.category_id,
            "name": self.name,
            "description": self.description,
            "basePriceCents": self.base_price_cents,
            "imageUrl": self.image_url,
            "active": self.active,
        }
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=str(data.get("id", "")),
            category_id=str(data.get("categoryId", "")),
            name=str(data.get("name", "")),
            description=data.get("description") or "",
            base_price_cents=_int_field(data, "basePriceCents", "Product"),
            image_url=data.get("imageUrl"),
            active=_bool_field(data, "active", "Product", True),
            extra=_extra(data, cls.KEYS),
        )


@dataclass
class ModifierGroup:
    """Modifier group model (e.g. "Size" on a sub)."""

    id: str = ""
    product_id: str = ""
    title: str = ""
    required: bool = False
    min_select: int = 0
    max_select: int = 1
    ui_type: str = "radio"  # "radio" single-select, "chips" multi-select
    sort: int = 0
    active: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("id", "productId", "title", "required", "minSelect", "maxSelect", "uiType", "sort", "active")

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "id": self.id,
            "productId": self.product_id,
            "title": self.title,
            "required": self.required,
            "minSelect": self.min_select,
            "maxSelect": self.max_select,
            "uiType": self.ui_type,
            "sort": self.sort,
            "active": self.active,
        }
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModifierGroup":
        return cls(
            id=str(data.get("id", "")),
            product_id=str(data.get("productId", "")),
            title=str(data.get("title", "")),
            required=_bool_field(data, "required", "Modifier group", False),
            min_select=_int_field(data, "minSelect", "Modifier group", 0),
            max_select=_int_field(data, "maxSelect", "Modifier group", 1),
            ui_type=str(data.get("uiType", "radio")),
            sort=_int_field(data, "sort", "Modifier group"),
            active=_bool_field(data, "active", "Modifier group", True),
            extra=_extra(data, cls.KEYS),
        )


@dataclass
class ModifierOption:
    """Modifier option model."""

    id: str = ""
    group_id: str = ""
    name: str = ""
    delta_cents: int = 0  # may be negative
    sort: int = 0
    active: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("id", "groupId", "name", "deltaCents", "sort", "active")

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "id": self.id,
            "groupId": self.group_id,
            "name": self.name,
            "deltaCents": self.delta_cents,
            "sort": self.sort,
            "active": self.active,
        }
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModifierOption":
        return cls(
            id=str(data.get("id", "")),
            group_id=str(data.get("groupId", "")),
            name=str(data.get("name", "")),
            delta_cents=_int_field(data, "deltaCents", "Modifier option"),
            sort=_int_field(data, "sort", "Modifier option"),
            active=_bool_field(data, "active", "Modifier option", True),
            extra=_extra(data, cls.KEYS),
        )


@dataclass
class CatalogSnapshot:
    """The four catalog collections as exported by / imported into the backend."""

    categories: List[Category] = field(default_factory=list)
    products: List[Product] = field(default_factory=list)
    modifier_groups: List[ModifierGroup] = field(default_factory=list)
    modifier_options: List[ModifierOption] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "categories": [c.to_dict() for c in self.categories],
            "products": [p.to_dict() for p in self.products],
            "modifierGroups": [g.to_dict() for g in self.modifier_groups],
            "modifierOptions": [o.to_dict() for o in self.modifier_options],
        }
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CatalogSnapshot":
        data = data or {}
        if not isinstance(data, dict):
            raise CatalogParseError("Root must be an object")
        return cls(
            categories=[Category.from_dict(c) for c in _entries(data, "categories")],
            products=[Product.from_dict(p) for p in _entries(data, "products")],
            modifier_groups=[ModifierGroup.from_dict(g) for g in _entries(data, "modifierGroups")],
            modifier_options=[
                ModifierOption.from_dict(o) for o in _entries(data, "modifierOptions")
            ],
            extra=_extra(data, COLLECTIONS),
        )

    def copy(self) -> "CatalogSnapshot":
        return CatalogSnapshot.from_dict(self.to_dict())

    def counts(self) -> Dict[str, int]:
        return {
            "categories": len(self.categories),
            "products": len(self.products),
            "modifierGroups": len(self.modifier_groups),
            "modifierOptions": len(self.modifier_options),
        }
