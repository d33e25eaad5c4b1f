"""Admin session: the bearer token and its lifecycle.

The token is set on login, cleared on logout or when the backend answers 401,
and read by the API client on every request. It is persisted to a small file
so consecutive CLI invocations share one login.
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional


class AdminSession:
    def __init__(self, store_path: Optional[str | Path] = None):
        self.logger = logging.getLogger(__name__)
        self.store_path = Path(store_path) if store_path else None
        self._token: Optional[str] = None
        if self.store_path is not None and self.store_path.exists():
            self._token = self.store_path.read_text(encoding="utf-8").strip() or None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def set(self, token: str) -> None:
        if not token:
            raise ValueError("token must be non-empty")
        self._token = token
        if self.store_path is not None:
            self.store_path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.store_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            # the mode argument only applies when the file is created
            os.fchmod(fd, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(token)

    def clear(self) -> None:
        self._token = None
        if self.store_path is not None and self.store_path.exists():
            self.store_path.unlink()
            self.logger.info("Cleared stored admin token")
