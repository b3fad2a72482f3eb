from __future__ import annotations

import hmac
from typing import Optional

from itsdangerous import BadSignature, BadTimeSignature, URLSafeTimedSerializer

from frontdoor.auth.config import GateConfig

SESSION_COOKIE_NAME = "ui-auth"
SESSION_MARKER = "authenticated"
SESSION_SALT = "frontdoor-ui-session-v1"


def _serializer(cfg: GateConfig) -> Optional[URLSafeTimedSerializer]:
    if not cfg.session_secret:
        return None
    return URLSafeTimedSerializer(secret_key=cfg.session_secret, salt=SESSION_SALT)


def encode_session(cfg: GateConfig) -> str:
    """
    Build the cookie value for a freshly authenticated caller.

    Without UI_SESSION_SECRET this is the bare marker. With it, the marker is signed and
    timestamped so a hand-crafted `ui-auth=authenticated` cookie is no longer accepted.
    """
    s = _serializer(cfg)
    if s is None:
        return SESSION_MARKER
    return s.dumps(SESSION_MARKER)


def is_valid_session(cfg: GateConfig, value: str | None) -> bool:
    if not value:
        return False
    s = _serializer(cfg)
    if s is None:
        return hmac.compare_digest(value.encode("utf-8", "surrogatepass"), SESSION_MARKER.encode("utf-8"))
    try:
        marker = s.loads(value, max_age=cfg.session_ttl_seconds)
    except (BadSignature, BadTimeSignature, ValueError):
        return False
    return marker == SESSION_MARKER


def session_cookie_kwargs(cfg: GateConfig, value: str) -> dict:
    return {
        "key": SESSION_COOKIE_NAME,
        "value": value,
        "max_age": cfg.session_ttl_seconds,
        "httponly": True,
        "secure": cfg.cookie_secure,
        "samesite": "lax",
        "path": "/",
    }
