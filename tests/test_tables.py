import pandas as pd

from kiosk_admin.catalog.models import CatalogSnapshot
from kiosk_admin.catalog.overrides import StoreOverrides
from kiosk_admin.models import AdminStore
from kiosk_admin.tables import catalog_frame, counts_frame, export_csv, stores_frame


def test_stores_frame_filters_by_query():
    stores = [
        AdminStore(store_id="QFC", name="Quick Foods Clifton"),
        AdminStore(store_id="NYC1", name="Midtown", active=False),
    ]
    assert list(stores_frame(stores)["store_id"]) == ["QFC", "NYC1"]
    assert list(stores_frame(stores, "clifton")["store_id"]) == ["QFC"]
    assert list(stores_frame(stores, "nyc")["store_id"]) == ["NYC1"]
    assert stores_frame(stores, "zzz").empty


def test_counts_frame(catalog_data):
    df = counts_frame(CatalogSnapshot.from_dict(catalog_data))
    assert dict(zip(df["collection"], df["count"])) == {
        "categories": 1,
        "products": 1,
        "modifierGroups": 1,
        "modifierOptions": 2,
    }


def test_catalog_frame_with_overrides(catalog_data):
    snapshot = CatalogSnapshot.from_dict(catalog_data)
    plain = catalog_frame(snapshot)
    assert plain.iloc[0]["price"] == "0.00"
    assert plain.iloc[0]["groups"] == 1

    overrides = StoreOverrides()
    overrides.set_category_active("subs", False)
    overrides.set_product_price_override("chicken_sub", 899)
    store_view = catalog_frame(snapshot, overrides)
    row = store_view.iloc[0]
    assert row["price"] == "8.99"
    assert not row["category_active"]
    assert row["active"]


def test_export_csv(tmp_path, catalog_data):
    written = export_csv(CatalogSnapshot.from_dict(catalog_data), tmp_path / "csv")
    options = pd.read_csv(written["modifierOptions"])
    assert list(options["id"]) == ["size_6", "size_12"]
    assert list(options["deltaCents"]) == [599, 1099]
    assert (tmp_path / "csv" / "categories.csv").exists()
