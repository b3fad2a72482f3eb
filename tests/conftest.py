"""
Pytest config.

Local imports like `import frontdoor` rely on the repo root being on sys.path; when the project
isn't installed (or a global `pytest` entrypoint is used) that doesn't happen reliably during
collection. We pin the behavior here so tests can always import the local package.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()

_GATE_ENV = ("UI_PASSWORD", "APP_ENV", "AUTH_COOKIE_SECURE", "UI_SESSION_SECRET", "ENABLE_ADMIN_UI")


@pytest.fixture(autouse=True)
def _isolated_gate_env(monkeypatch: pytest.MonkeyPatch):
    """
    Gate config is cached process-wide. Start every test from a clean environment and a cold
    cache so env-driven tests don't leak into each other.
    """
    from frontdoor.auth.config import load_gate_config

    for name in _GATE_ENV:
        monkeypatch.delenv(name, raising=False)
    load_gate_config.cache_clear()
    yield
    load_gate_config.cache_clear()
