from __future__ import annotations

from fastapi import Request

from frontdoor.auth.config import GateConfig, load_gate_config
from frontdoor.auth.gate import GateDecision, evaluate_request
from frontdoor.auth.session import SESSION_COOKIE_NAME


def get_config(request: Request) -> GateConfig:
    """
    Config injected into the app by `create_app(cfg)`, else the process-wide env config.
    """
    cfg = getattr(request.app.state, "gate_config", None)
    if cfg is None:
        cfg = load_gate_config()
    return cfg


def gate_request(request: Request) -> GateDecision:
    """Run the gate against an incoming request. Only reads the session cookie."""
    cfg = get_config(request)
    return evaluate_request(cfg, request.url.path or "/", request.cookies.get(SESSION_COOKIE_NAME))
