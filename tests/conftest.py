import sys, pathlib
import json

import pytest

# Ensure project src directory is on path for tests
PROJECT_ROOT = pathlib.Path(__file__).parent.parent
SRC = PROJECT_ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text


class FakeHttp:
    """Stands in for requests.Session: replays queued responses, records calls."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, status_code=200, payload=None, text=None):
        self.responses.append(FakeResponse(status_code, payload, text))

    def request(self, method, url, headers=None, json=None, params=None, timeout=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": dict(headers or {}),
                "json": json,
                "params": params,
                "timeout": timeout,
            }
        )
        if not self.responses:
            raise AssertionError(f"unexpected request {method} {url}")
        return self.responses.pop(0)


def subs_catalog():
    return {
        "categories": [
            {"id": "subs", "name": "Subs", "sort": 0, "imageUrl": None, "active": True}
        ],
        "products": [
            {
                "id": "chicken_sub",
                "categoryId": "subs",
                "name": "Chicken Sub",
                "description": "",
                "basePriceCents": 0,
                "imageUrl": "fresh_items/sub.jpg",
                "active": True,
            }
        ],
        "modifierGroups": [
            {
                "id": "size_chicken_sub",
                "productId": "chicken_sub",
                "title": "Size",
                "required": True,
                "minSelect": 1,
                "maxSelect": 1,
                "uiType": "radio",
                "sort": 0,
                "active": True,
            }
        ],
        "modifierOptions": [
            {"id": "size_6", "groupId": "size_chicken_sub", "name": '6"', "deltaCents": 599, "sort": 0, "active": True},
            {"id": "size_12", "groupId": "size_chicken_sub", "name": '12"', "deltaCents": 1099, "sort": 1, "active": True},
        ],
    }


@pytest.fixture
def catalog_data():
    return subs_catalog()


@pytest.fixture
def fake_http():
    return FakeHttp()


@pytest.fixture
def admin_config(tmp_path):
    from kiosk_admin.config import AdminConfig

    return AdminConfig(api_base_url="https://api.example.com/", token_path=str(tmp_path / "token"))


@pytest.fixture
def client(admin_config, fake_http):
    from kiosk_admin.client import AdminApiClient

    return AdminApiClient(admin_config, http=fake_http)


@pytest.fixture
def logged_in_client(client):
    client.session.set("tok-123")
    return client
