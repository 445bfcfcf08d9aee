from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from invoice_swift.env import session_file

logger = logging.getLogger(__name__)

_TOKEN_KEY = "token"
_USER_KEY = "user"


class SessionContext(Protocol):
    def get_token(self) -> Optional[str]:
        ...

    def get_user(self) -> Optional[dict[str, Any]]:
        ...

    def store(self, token: str, user: Optional[dict[str, Any]] = None) -> None:
        ...

    def logout(self) -> None:
        ...


class InMemorySession:
    """Session held in process memory; nothing survives a restart."""

    def __init__(self, token: Optional[str] = None, user: Optional[dict[str, Any]] = None) -> None:
        self._token = token
        self._user = dict(user) if user else None

    def get_token(self) -> Optional[str]:
        return self._token

    def get_user(self) -> Optional[dict[str, Any]]:
        return dict(self._user) if self._user else None

    def store(self, token: str, user: Optional[dict[str, Any]] = None) -> None:
        self._token = token
        self._user = dict(user) if user else None

    def logout(self) -> None:
        self._token = None
        self._user = None


class FileSession:
    """Session persisted as a small JSON key-value file."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else session_file()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            loaded = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("session.unreadable", extra={"path": str(self.path)})
            return {}
        return loaded if isinstance(loaded, dict) else {}

    def _write(self, values: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(values, ensure_ascii=False), encoding="utf-8")

    def get_token(self) -> Optional[str]:
        token = self._read().get(_TOKEN_KEY)
        return str(token) if token else None

    def get_user(self) -> Optional[dict[str, Any]]:
        user = self._read().get(_USER_KEY)
        return user if isinstance(user, dict) else None

    def store(self, token: str, user: Optional[dict[str, Any]] = None) -> None:
        values = self._read()
        values[_TOKEN_KEY] = token
        if user is None:
            values.pop(_USER_KEY, None)
        else:
            values[_USER_KEY] = user
        self._write(values)
        logger.info("session.stored", extra={"path": str(self.path)})

    def logout(self) -> None:
        values = self._read()
        values.pop(_TOKEN_KEY, None)
        values.pop(_USER_KEY, None)
        self._write(values)
        logger.info("session.logout", extra={"path": str(self.path)})
