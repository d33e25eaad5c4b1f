from pathlib import Path

import pytest
import requests

from kiosk_admin.auth import LoginError
from kiosk_admin.catalog.overrides import StoreOverrides
from kiosk_admin.client import (
    AdminApiClient,
    ApiError,
    AuthRequiredError,
    ConfigurationError,
)
from kiosk_admin.config import AdminConfig


def test_login_stores_token_and_sends_no_bearer(client, fake_http):
    fake_http.queue(200, {"access_token": "abc"})
    assert client.login(" admin@example.com ", "pw") == "abc"
    call = fake_http.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://api.example.com/admin/auth/login"
    assert call["json"] == {"email": "admin@example.com", "password": "pw"}
    assert "Authorization" not in call["headers"]
    assert client.session.token == "abc"


def test_login_without_token_field_fails(client, fake_http):
    client.session.set("old")
    fake_http.queue(200, {"user": "admin"})
    with pytest.raises(LoginError, match="user"):
        client.login("a@b.c", "pw")
    assert client.session.token is None


def test_login_401_is_an_api_error_not_logout_loop(client, fake_http):
    fake_http.queue(401, {"detail": "Invalid credentials"})
    with pytest.raises(ApiError, match="Invalid credentials"):
        client.login("a@b.c", "bad")


def test_bearer_header_attached(logged_in_client, fake_http):
    fake_http.queue(200, [{"store_id": "QFC", "name": "Quick Foods Clifton", "active": True}])
    stores = logged_in_client.list_stores()
    assert stores[0].store_id == "QFC"
    headers = fake_http.calls[0]["headers"]
    assert headers["Authorization"] == "Bearer tok-123"
    assert headers["Content-Type"] == "application/json"


def test_401_clears_token_and_next_call_does_not_hit_network(logged_in_client, fake_http, admin_config):
    fake_http.queue(401, {"detail": "Invalid admin token"})
    with pytest.raises(AuthRequiredError, match="Invalid admin token"):
        logged_in_client.export_catalog()
    assert logged_in_client.session.token is None
    assert not Path(admin_config.token_path).exists()

    with pytest.raises(AuthRequiredError):
        logged_in_client.list_stores()
    assert len(fake_http.calls) == 1


def test_protected_call_without_login(client, fake_http):
    with pytest.raises(AuthRequiredError):
        client.export_catalog()
    assert fake_http.calls == []


@pytest.mark.parametrize(
    "status,kwargs,expected",
    [
        (400, {"payload": {"detail": "store_id exists"}}, "store_id exists"),
        (422, {"payload": {"message": "bad body"}}, "bad body"),
        (422, {"payload": {"detail": [{"loc": ["body", "name"], "msg": "field required"}]}}, "field required"),
        (500, {"text": "Internal Server Error"}, "Internal Server Error"),
        (503, {"text": ""}, "Request failed (503)"),
    ],
)
def test_error_message_surfaces_backend_text(logged_in_client, fake_http, status, kwargs, expected):
    fake_http.queue(status, **kwargs)
    with pytest.raises(ApiError) as exc:
        logged_in_client.list_stores()
    assert exc.value.status == status
    assert expected in str(exc.value)
    assert logged_in_client.session.token == "tok-123"


def test_transport_error_wrapped(logged_in_client):
    class Broken:
        def request(self, *a, **kw):
            raise requests.ConnectionError("connection refused")

    logged_in_client.http = Broken()
    with pytest.raises(ApiError, match="connection refused") as exc:
        logged_in_client.export_catalog()
    assert exc.value.status is None


def test_missing_base_url(tmp_path, fake_http):
    client = AdminApiClient(AdminConfig(token_path=str(tmp_path / "t")), http=fake_http)
    with pytest.raises(ConfigurationError):
        client.login("a@b.c", "pw")
    assert fake_http.calls == []


def test_create_store_tax_rate_optional(logged_in_client, fake_http):
    fake_http.queue(200, {"ok": True})
    fake_http.queue(200, {"ok": True})
    logged_in_client.create_store("QFC", "Quick Foods", "QFC12345")
    logged_in_client.create_store("QFC2", "Quick Foods 2", "pw", tax_rate=0.06625)
    assert "tax_rate" not in fake_http.calls[0]["json"]
    assert fake_http.calls[1]["json"]["tax_rate"] == 0.06625


def test_reset_password_returns_generated(logged_in_client, fake_http):
    fake_http.queue(200, {"ok": True, "password": "NEWPASS1"})
    fake_http.queue(200, {"ok": True})
    assert logged_in_client.reset_store_password("QFC") == "NEWPASS1"
    assert fake_http.calls[0]["url"].endswith("/admin/stores/QFC/reset-password")
    assert fake_http.calls[0]["json"] == {}
    assert logged_in_client.reset_store_password("QFC", "mine") is None
    assert fake_http.calls[1]["json"] == {"password": "mine"}


def test_catalog_import_export(logged_in_client, fake_http, catalog_data):
    fake_http.queue(200, catalog_data)
    fake_http.queue(200, {"ok": True, "counts": {"categories": 1}})
    assert logged_in_client.export_catalog() == catalog_data
    out = logged_in_client.import_catalog(catalog_data)
    assert out["ok"] is True
    assert fake_http.calls[1]["method"] == "POST"
    assert fake_http.calls[1]["json"] == catalog_data


def test_store_overrides_get_and_put(logged_in_client, fake_http):
    fake_http.queue(
        200,
        {
            "categories": [{"categoryId": "subs", "active": False, "sortOverride": None}],
            "products": [],
            "options": [],
        },
    )
    fake_http.queue(200, {"ok": True})
    overrides = logged_in_client.get_store_overrides("QFC")
    assert isinstance(overrides, StoreOverrides)
    assert overrides.effective_category_active("subs") is False
    logged_in_client.set_store_overrides("QFC", overrides)
    put = fake_http.calls[1]
    assert put["method"] == "PUT"
    assert put["url"].endswith("/admin/stores/QFC/overrides")
    assert put["json"]["categories"][0]["categoryId"] == "subs"


def test_daily_report_date_param(logged_in_client, fake_http):
    import datetime

    fake_http.queue(200, {"total_cents": 1234})
    report = logged_in_client.daily_report(datetime.date(2026, 10, 1))
    assert report == {"total_cents": 1234}
    assert fake_http.calls[0]["params"] == {"date": "2026-10-01"}
    assert fake_http.calls[0]["url"].endswith("/admin/reports/daily")


@pytest.mark.parametrize(
    "payload",
    [
        {"categories": [{"categoryId": "subs", "sortOverride": "first"}]},
        {"products": ["chicken_sub"]},
    ],
)
def test_malformed_overrides_become_api_error(logged_in_client, fake_http, payload):
    fake_http.queue(200, payload)
    with pytest.raises(ApiError, match="Unexpected overrides response for QFC"):
        logged_in_client.get_store_overrides("QFC")


@pytest.mark.parametrize(
    "payload",
    [
        [{"store_id": "QFC", "name": "Quick Foods", "tax_rate": "six percent"}],
        ["QFC"],
        {"stores": []},
    ],
)
def test_malformed_store_list_becomes_api_error(logged_in_client, fake_http, payload):
    fake_http.queue(200, payload)
    with pytest.raises(ApiError, match="Unexpected stores response"):
        logged_in_client.list_stores()
