"""
Production guard utilities.

Helpers to restrict access to certain routes/features in production.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from frontdoor.auth.config import GateConfig
from frontdoor.auth.deps import get_config


def is_production(cfg: GateConfig) -> bool:
    return cfg.is_production


def is_admin_ui_enabled(cfg: GateConfig) -> bool:
    """
    Controlled by ENABLE_ADMIN_UI (default: enabled in dev, disabled in prod).
    """
    if cfg.admin_ui_flag is not None:
        return cfg.admin_ui_flag
    return not cfg.is_production


def block_in_production(request: Request) -> None:
    """FastAPI dependency: 403 when running in production."""
    if is_production(get_config(request)):
        raise HTTPException(status_code=403, detail="This endpoint is disabled in production")
