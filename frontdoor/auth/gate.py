from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from frontdoor.auth.config import GateConfig
from frontdoor.auth.routes import LOGIN_PATH, RouteClass, classify_path
from frontdoor.auth.session import is_valid_session


@dataclass(frozen=True)
class GateDecision:
    admit: bool
    route_class: RouteClass
    redirect_to: Optional[str] = None  # set only when admit is False


def login_redirect_target(path: str) -> str:
    """Login URL that returns the caller to `path` after a successful login."""
    return f"{LOGIN_PATH}?{urlencode({'redirect': path})}"


def evaluate_request(cfg: GateConfig, path: str, session_value: str | None) -> GateDecision:
    """
    Decide admit-or-redirect for one request.

    Pure function of (path, cookie value): no I/O, no mutation, same answer on every retry.
    """
    route_class = classify_path(path)
    if route_class is not RouteClass.PROTECTED:
        return GateDecision(admit=True, route_class=route_class)

    if is_valid_session(cfg, session_value):
        return GateDecision(admit=True, route_class=route_class)

    return GateDecision(admit=False, route_class=route_class, redirect_to=login_redirect_target(path))
