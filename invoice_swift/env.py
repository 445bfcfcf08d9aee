from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_API_URL = "https://invoice-swift-backend-production.up.railway.app"
DEFAULT_TIMEOUT_S = 15.0

_LOADED = False


def load_env() -> None:
    global _LOADED
    if _LOADED:
        return
    _LOADED = True

    base_dir = Path(__file__).resolve().parent
    # Project root .env first, then one next to the package.
    candidates = [
        base_dir.parent / ".env",
        base_dir / ".env",
    ]
    for path in candidates:
        if path.exists():
            # Real environment variables win over the file.
            load_dotenv(dotenv_path=path, override=False)


def is_debug() -> bool:
    return os.getenv("INVOICE_SWIFT_DEBUG") == "1"


def api_base_url() -> str:
    url = (os.getenv("INVOICE_SWIFT_API_URL") or "").strip() or DEFAULT_API_URL
    return url.rstrip("/")


def request_timeout() -> float:
    raw = (os.getenv("INVOICE_SWIFT_TIMEOUT") or "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_S
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid INVOICE_SWIFT_TIMEOUT value: {raw}") from exc
    if value <= 0:
        raise ValueError(f"Invalid INVOICE_SWIFT_TIMEOUT value: {raw}")
    return value


def session_file() -> Path:
    raw = (os.getenv("INVOICE_SWIFT_SESSION_FILE") or "").strip()
    return Path(raw) if raw else Path("./data/session.json")


def log_dir() -> Path:
    raw = (os.getenv("INVOICE_SWIFT_LOG_DIR") or "").strip()
    return Path(raw) if raw else Path("./data/logs")
