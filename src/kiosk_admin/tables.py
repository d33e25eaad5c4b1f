"""
Tabular views (pandas) used by the CLI for listings and CSV export.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .catalog.ids import sorted_entities
from .catalog.models import CatalogSnapshot
from .catalog.overrides import StoreOverrides
from .models import AdminStore
from .utils import dollars_from_cents

LOGGER = logging.getLogger(__name__)

CSV_FILES = {
    "categories": "categories.csv",
    "products": "products.csv",
    "modifierGroups": "modifier_groups.csv",
    "modifierOptions": "modifier_options.csv",
}


def stores_frame(stores: List[AdminStore], query: Optional[str] = None) -> pd.DataFrame:
    rows = [s.to_dict() for s in stores if s.matches(query)]
    return pd.DataFrame(rows, columns=["store_id", "name", "active", "tax_rate"])


def counts_frame(snapshot: CatalogSnapshot) -> pd.DataFrame:
    counts = snapshot.counts()
    return pd.DataFrame({"collection": list(counts.keys()), "count": list(counts.values())})


def catalog_frame(snapshot: CatalogSnapshot, overrides: Optional[StoreOverrides] = None) -> pd.DataFrame:
    """One row per product, ordered by category then product name.

    With ``overrides`` the price and active columns show the store's effective values.
    """
    rows = []
    for category in sorted_entities(snapshot.categories):
        category_active = category.active
        if overrides is not None:
            category_active = category_active and overrides.effective_category_active(category.id)
        products = sorted(
            (p for p in snapshot.products if p.category_id == category.id),
            key=lambda p: (p.name, p.id),
        )
        for product in products:
            if overrides is not None:
                product = overrides.effective_product(product)
            groups = [g for g in snapshot.modifier_groups if g.product_id == product.id]
            rows.append(
                {
                    "category": category.id,
                    "category_active": category_active,
                    "product": product.id,
                    "name": product.name,
                    "price": dollars_from_cents(product.base_price_cents),
                    "active": product.active,
                    "groups": len(groups),
                }
            )
    return pd.DataFrame(
        rows,
        columns=["category", "category_active", "product", "name", "price", "active", "groups"],
    )


def export_csv(snapshot: CatalogSnapshot, out_dir) -> Dict[str, Path]:
    """Write one CSV per collection into ``out_dir``; return the written paths."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    data = snapshot.to_dict()
    written = {}
    for collection, filename in CSV_FILES.items():
        path = out / filename
        pd.DataFrame(data[collection]).to_csv(path, index=False)
        written[collection] = path
    LOGGER.info(f"Exported catalog CSV files to {out}")
    return written
