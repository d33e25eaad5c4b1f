"""HTTP client for the kiosk admin backend."""

from __future__ import annotations
import json
import logging
from datetime import date as _date
from typing import Any, Dict, List, Optional

import requests

from .auth import extract_token
from .catalog.overrides import StoreOverrides
from .config import AdminConfig, ConfigurationError
from .models import AdminStore
from .session import AdminSession


class ApiError(Exception):
    def __init__(self, status: Optional[int], message: str):
        self.status = status
        self.message = message
        super().__init__(message)


class AuthRequiredError(Exception):
    """No valid admin token: the user has to log in again."""


def error_message(status: int, text: str, payload: Any) -> str:
    """Pick the backend's ``detail``/``message`` or fall back to the raw body."""
    if isinstance(payload, dict):
        for key in ("detail", "message"):
            value = payload.get(key)
            if value:
                return value if isinstance(value, str) else json.dumps(value)
    if text and text.strip():
        return text.strip()
    return f"Request failed ({status})"


class AdminApiClient:
    def __init__(
        self,
        config: Optional[AdminConfig] = None,
        session: Optional[AdminSession] = None,
        http=None,
    ):
        self.config = config or AdminConfig.from_env()
        self.session = session or AdminSession(self.config.token_path)
        self.http = http or requests.Session()
        self.logger = logging.getLogger(__name__)

    def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        auth: bool = True,
    ) -> Any:
        if not self.config.api_base_url:
            raise ConfigurationError("Missing KIOSK_ADMIN_API_BASE_URL (or api_base_url in config)")
        headers = {"Content-Type": "application/json"}
        if auth:
            if not self.session.is_authenticated:
                raise AuthRequiredError("Not logged in; run `kiosk-admin login` first")
            headers["Authorization"] = f"Bearer {self.session.token}"

        url = f"{self.config.api_base_url}{path}"
        try:
            resp = self.http.request(
                method,
                url,
                headers=headers,
                json=body,
                params=params,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            self.logger.error(f"{method} {path} failed: {e}")
            raise ApiError(None, str(e)) from e
        self.logger.info(f"{method} {path} -> {resp.status_code}")

        text = resp.text or ""
        try:
            payload = json.loads(text) if text else None
        except ValueError:
            payload = None

        if resp.status_code == 401 and auth:
            self.session.clear()
            raise AuthRequiredError(
                error_message(resp.status_code, text, payload) + " (logged out; please log in again)"
            )
        if not 200 <= resp.status_code < 300:
            raise ApiError(resp.status_code, error_message(resp.status_code, text, payload))
        return payload

    # --- auth --- #
    def login(self, email: str, password: str) -> str:
        # Drop any stale token first so a failed login never leaves one behind.
        self.session.clear()
        payload = self._request(
            "POST",
            "/admin/auth/login",
            body={"email": email.strip(), "password": password},
            auth=False,
        )
        token = extract_token(payload)
        self.session.set(token)
        return token

    def logout(self) -> None:
        self.session.clear()

    # --- stores --- #
    def list_stores(self) -> List[AdminStore]:
        payload = self._request("GET", "/admin/stores") or []
        if not isinstance(payload, list) or not all(isinstance(s, dict) for s in payload):
            raise ApiError(None, "Unexpected stores response: expected a list of objects")
        try:
            return [AdminStore.from_dict(s) for s in payload]
        except (TypeError, ValueError) as e:
            raise ApiError(None, f"Unexpected stores response: {e}") from e

    def create_store(
        self, store_id: str, name: str, password: str, tax_rate: Optional[float] = None
    ) -> Any:
        body: Dict[str, Any] = {
            "store_id": store_id.strip(),
            "name": name.strip(),
            "password": password,
        }
        if tax_rate is not None:
            body["tax_rate"] = tax_rate
        return self._request("POST", "/admin/stores", body=body)

    def reset_store_password(self, store_id: str, password: Optional[str] = None) -> Optional[str]:
        """Reset a kiosk password; return the generated one if the backend made one up."""
        body = {"password": password} if password else {}
        payload = self._request("POST", f"/admin/stores/{store_id}/reset-password", body=body)
        if isinstance(payload, dict):
            for key in ("password", "new_password", "generated_password"):
                if payload.get(key):
                    return str(payload[key])
        return None

    # --- catalog --- #
    def export_catalog(self) -> Dict[str, Any]:
        return self._request("GET", "/admin/catalog/export") or {}

    def import_catalog(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/admin/catalog/import", body=payload) or {}

    # --- store overrides --- #
    def get_store_overrides(self, store_id: str) -> StoreOverrides:
        payload = self._request("GET", f"/admin/stores/{store_id}/overrides")
        try:
            return StoreOverrides.from_dict(payload)
        except ValueError as e:
            raise ApiError(None, f"Unexpected overrides response for {store_id}: {e}") from e

    def set_store_overrides(self, store_id: str, overrides: StoreOverrides) -> Any:
        return self._request(
            "PUT", f"/admin/stores/{store_id}/overrides", body=overrides.to_dict()
        )

    # --- reports --- #
    def daily_report(self, day: Optional[_date | str] = None) -> Any:
        if day is None:
            day = _date.today()
        if isinstance(day, _date):
            day = day.isoformat()
        return self._request("GET", "/admin/reports/daily", params={"date": day})
