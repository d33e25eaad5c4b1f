"""Login response handling.

Backend revisions have returned the token under different keys. This is the
only place that knows about them; the lookup order is:

1. ``access_token``
2. ``token``
3. ``jwt``
4. the same three keys inside a nested ``data`` object
"""

from __future__ import annotations
from typing import Any

TOKEN_KEYS = ("access_token", "token", "jwt")


class LoginError(Exception):
    pass


def extract_token(payload: Any) -> str:
    if isinstance(payload, dict):
        for scope in (payload, payload.get("data")):
            if not isinstance(scope, dict):
                continue
            for key in TOKEN_KEYS:
                value = scope.get(key)
                if isinstance(value, str) and value.strip():
                    return value.strip()
        seen = ", ".join(sorted(payload.keys())) or "none"
        raise LoginError(f"Login response did not include a token (keys: {seen})")
    raise LoginError(f"Login response was not an object: {type(payload).__name__}")
