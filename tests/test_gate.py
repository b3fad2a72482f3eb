from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

from frontdoor.auth.config import GateConfig
from frontdoor.auth.gate import evaluate_request, login_redirect_target
from frontdoor.auth.routes import RouteClass
from frontdoor.auth.session import SESSION_MARKER, encode_session


def _cfg(**overrides) -> GateConfig:
    base = dict(ui_password="abc123", environment="development", cookie_secure=False)
    base.update(overrides)
    return GateConfig(**base)


def _redirect_param(target: str) -> str:
    parts = urlsplit(target)
    assert parts.path == "/login"
    return parse_qs(parts.query)["redirect"][0]


def test_health_without_token_is_admitted() -> None:
    d = evaluate_request(_cfg(), "/api/health", None)
    assert d.admit is True
    assert d.route_class is RouteClass.PUBLIC
    assert d.redirect_to is None


def test_public_paths_ignore_token_validity() -> None:
    cfg = _cfg()
    for path in ("/login", "/api/auth/login", "/api/health", "/api/admin/populate-embeddings"):
        for token in (None, "", "garbage", SESSION_MARKER):
            assert evaluate_request(cfg, path, token).admit is True


def test_dashboard_without_token_redirects_to_login() -> None:
    d = evaluate_request(_cfg(), "/dashboard", None)
    assert d.admit is False
    assert d.redirect_to is not None
    assert _redirect_param(d.redirect_to) == "/dashboard"


def test_dashboard_with_marker_is_admitted() -> None:
    d = evaluate_request(_cfg(), "/dashboard", "authenticated")
    assert d.admit is True
    assert d.route_class is RouteClass.PROTECTED


def test_wrong_marker_value_is_denied() -> None:
    cfg = _cfg()
    for token in ("", "Authenticated", "authenticated ", "true", "1"):
        assert evaluate_request(cfg, "/dashboard", token).admit is False


def test_redirect_encodes_nested_path() -> None:
    d = evaluate_request(_cfg(), "/foo/bar", None)
    assert _redirect_param(d.redirect_to or "") == "/foo/bar"


def test_login_redirect_target_escapes_path() -> None:
    target = login_redirect_target("/a b&c")
    assert target.startswith("/login?redirect=")
    assert _redirect_param(target) == "/a b&c"


def test_decision_is_idempotent() -> None:
    cfg = _cfg()
    for path, token in (("/dashboard", None), ("/dashboard", SESSION_MARKER), ("/api/health", None)):
        assert evaluate_request(cfg, path, token) == evaluate_request(cfg, path, token)


def test_decision_does_not_depend_on_configured_password() -> None:
    # The gate only reads the cookie; a missing UI_PASSWORD is the verifier's problem.
    assert evaluate_request(_cfg(ui_password=None), "/dashboard", SESSION_MARKER).admit is True


def test_signed_sessions_reject_bare_marker() -> None:
    cfg = _cfg(session_secret="s3cret-signing-key")
    assert evaluate_request(cfg, "/dashboard", SESSION_MARKER).admit is False
    assert evaluate_request(cfg, "/dashboard", encode_session(cfg)).admit is True
