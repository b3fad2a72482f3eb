"""
HTTP surface for the shared-secret gate.

Every request passes through the gate middleware before routing; only the login page, the auth
API, the health check and the one-time bootstrap endpoint are reachable without a session.
"""

from __future__ import annotations

import json
import logging
import os
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from frontdoor.auth.config import GateConfig
from frontdoor.auth.deps import gate_request, get_config
from frontdoor.auth.errors import AuthError
from frontdoor.auth.guards import block_in_production, is_admin_ui_enabled, is_production
from frontdoor.auth.routes import BOOTSTRAP_PATH, HEALTH_PATH, LOGIN_API_PATH, LOGIN_PATH, RouteClass
from frontdoor.auth.session import session_cookie_kwargs
from frontdoor.auth.util import sanitize_next_path
from frontdoor.auth.verifier import CredentialVerifier, parse_login_body

logger = logging.getLogger(__name__)

BootstrapTask = Callable[[Dict[str, Any]], Dict[str, Any]]

_LOGIN_PAGE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Sign in</title>
</head>
<body>
<main>
<h1>Sign in</h1>
<form id="login-form">
<label for="password">Password</label>
<input id="password" name="password" type="password" autocomplete="current-password" required autofocus>
<button type="submit">Continue</button>
<p id="login-error" role="alert" hidden></p>
</form>
</main>
<script>
const redirectTo = __REDIRECT__;
document.getElementById("login-form").addEventListener("submit", async (event) => {
  event.preventDefault();
  const errorEl = document.getElementById("login-error");
  errorEl.hidden = true;
  const res = await fetch("__LOGIN_API__", {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: JSON.stringify({password: document.getElementById("password").value}),
  });
  if (res.ok) {
    window.location.assign(redirectTo);
    return;
  }
  const body = await res.json().catch(() => ({}));
  errorEl.textContent = body.error || "Login failed";
  errorEl.hidden = false;
});
</script>
</body>
</html>
"""

_INDEX_PAGE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>%(title)s</title></head>
<body><main><h1>%(title)s</h1><p>Signed in.</p></main></body>
</html>
"""


def _script_literal(value: str) -> str:
    # JSON is valid JS; escape `<` so the value can never close the <script> element.
    return json.dumps(value).replace("<", "\\u003c")


def _verifier(request: Request) -> CredentialVerifier:
    verifier = getattr(request.app.state, "verifier", None)
    if verifier is None:
        verifier = CredentialVerifier(get_config(request))
    return verifier


async def gate_requests(request: Request, call_next):
    """Log all incoming HTTP requests and enforce the session gate."""
    start_time = time.time()
    path = request.url.path or "/"
    try:
        decision = gate_request(request)

        # Static assets are not part of the protected surface: no gate, no request logging.
        if decision.route_class is RouteClass.ASSET:
            return await call_next(request)

        logger.debug("%s %s", request.method, path)
        if not decision.admit:
            logger.debug("%s %s - redirect to %s (no valid session)", request.method, path, decision.redirect_to)
            return RedirectResponse(url=decision.redirect_to or LOGIN_PATH, status_code=307)

        response = await call_next(request)
        process_time = time.time() - start_time
        logger.debug("%s %s - %d (%.3fs)", request.method, path, response.status_code, process_time)
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.exception("%s %s - ERROR after %.3fs: %s", request.method, path, process_time, str(e))
        raise


def auth_login(request: Request, body: bytes) -> JSONResponse:
    verifier = _verifier(request)
    cfg = verifier.config
    try:
        verifier.ensure_configured()
        credentials = parse_login_body(body)
        session_value = verifier.verify(credentials.password)
    except AuthError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.public_message})
    except Exception:
        logger.exception("Login error")
        return JSONResponse(status_code=500, content={"error": "An error occurred during login"})

    resp = JSONResponse(content={"success": True})
    resp.headers["Cache-Control"] = "no-store"
    resp.set_cookie(**session_cookie_kwargs(cfg, session_value))
    return resp


def create_app(cfg: Optional[GateConfig] = None, *, bootstrap_task: Optional[BootstrapTask] = None) -> FastAPI:
    """
    Build the application.

    Args:
        cfg: gate configuration; when None it is loaded from the environment on first use
        bootstrap_task: callable run by the one-time bootstrap endpoint (payload -> stats)
    """
    app = FastAPI(title="frontdoor")
    app.state.gate_config = cfg
    app.state.verifier = CredentialVerifier(cfg) if cfg is not None else None
    app.state.bootstrap_task = bootstrap_task

    app.middleware("http")(gate_requests)

    @app.post(LOGIN_API_PATH)
    async def login(request: Request) -> JSONResponse:
        """Exchange the shared password for the session cookie."""
        return auth_login(request, await request.body())

    @app.get(LOGIN_PATH, response_class=HTMLResponse)
    async def login_page(redirect: Optional[str] = Query(None)) -> HTMLResponse:
        # Constant placeholder first so user input is never re-scanned for placeholders.
        page = _LOGIN_PAGE.replace("__LOGIN_API__", LOGIN_API_PATH)
        page = page.replace("__REDIRECT__", _script_literal(sanitize_next_path(redirect)))
        resp = HTMLResponse(content=page)
        resp.headers["Cache-Control"] = "no-store"
        return resp

    @app.get(HEALTH_PATH)
    def health(request: Request) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": get_config(request).environment,
        }

    @app.get("/api/config")
    def client_config(request: Request) -> Dict[str, Any]:
        """Safe client-side config: production mode and feature flags."""
        cfg = get_config(request)
        return {
            "isProduction": is_production(cfg),
            "adminUIEnabled": is_admin_ui_enabled(cfg),
            "features": {
                "search": True,
                "qa": True,
                "starred": not is_production(cfg),
            },
        }

    @app.post(BOOTSTRAP_PATH, dependencies=[Depends(block_in_production)])
    def populate_embeddings(request: Request, payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
        """
        One-time bootstrap hook. Reachable without a session, disabled in production.
        """
        task: Optional[BootstrapTask] = request.app.state.bootstrap_task
        if task is None:
            raise HTTPException(status_code=503, detail="No bootstrap task configured")
        try:
            stats = task(payload or {})
        except Exception as e:
            logger.exception("Bootstrap task failed")
            raise HTTPException(status_code=500, detail=f"Bootstrap task failed: {str(e)}")
        logger.info("Bootstrap task completed: %s", stats)
        return {"success": True, "stats": stats}

    @app.get("/", response_class=HTMLResponse)
    def index() -> HTMLResponse:
        return HTMLResponse(content=_INDEX_PAGE % {"title": "frontdoor"})

    return app


app = create_app()


def run(host: str = "0.0.0.0", port: int = 8080) -> None:
    import uvicorn

    # Configure logging for the application
    log_level = os.getenv("LOG_LEVEL", "info").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Map Python logging levels to uvicorn log levels
    uvicorn_log_level = (
        log_level.lower() if log_level.lower() in ["critical", "error", "warning", "info", "debug", "trace"] else "info"
    )

    logger.info("Starting frontdoor server on %s:%d (log_level=%s)", host, port, log_level)
    uvicorn.run(app, host=host, port=port, log_level=uvicorn_log_level)
