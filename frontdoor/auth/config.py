from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

SESSION_TTL_SECONDS = 60 * 60 * 24 * 7  # 7 days


def _env_flag(name: str) -> Optional[bool]:
    raw = (os.getenv(name, "") or "").strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    return None


def _env_enabled(name: str) -> Optional[bool]:
    """None when unset; otherwise only an explicit truthy value enables (anything else disables)."""
    raw = (os.getenv(name, "") or "").strip().lower()
    if not raw:
        return None
    return raw in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GateConfig:
    # The single shared password. None means "not configured", which is a server error, not a failed login.
    ui_password: Optional[str]

    environment: str  # production|development|...
    cookie_secure: bool
    session_ttl_seconds: int = SESSION_TTL_SECONDS

    # Optional hardening: sign the session marker so it cannot be forged by hand.
    session_secret: Optional[str] = None

    # Explicit ENABLE_ADMIN_UI value, if any.
    admin_ui_flag: Optional[bool] = None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def password_configured(self) -> bool:
        return bool(self.ui_password)

    @property
    def signing_enabled(self) -> bool:
        return bool(self.session_secret)


@lru_cache(maxsize=1)
def load_gate_config() -> GateConfig:
    """
    Load gate configuration from environment variables.

    Called once at process start; the result is immutable and shared by every request.
    UI_PASSWORD is taken verbatim (no stripping) because whitespace is part of the secret.
    """
    environment = (os.getenv("APP_ENV", "") or "").strip().lower() or "development"

    cookie_secure = _env_flag("AUTH_COOKIE_SECURE")
    if cookie_secure is None:
        # Default: secure cookies only in production; plain HTTP works for local dev.
        cookie_secure = environment == "production"

    return GateConfig(
        ui_password=os.getenv("UI_PASSWORD") or None,
        environment=environment,
        cookie_secure=cookie_secure,
        session_secret=(os.getenv("UI_SESSION_SECRET", "") or "").strip() or None,
        admin_ui_flag=_env_enabled("ENABLE_ADMIN_UI"),
    )
