from __future__ import annotations

import hmac
import json
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from frontdoor.auth.config import GateConfig
from frontdoor.auth.errors import AuthenticationFailed, ConfigurationError, MalformedCredentials
from frontdoor.auth.session import encode_session

logger = logging.getLogger(__name__)


class LoginRequest(BaseModel):
    password: str


def parse_login_body(raw: bytes | str) -> LoginRequest:
    """
    Parse a login submission.

    Raises:
        MalformedCredentials: body is not JSON, not an object, or lacks a string `password`
    """
    try:
        data: Any = json.loads(raw or b"")
    except (TypeError, ValueError) as e:
        raise MalformedCredentials("login body is not valid JSON") from e
    if not isinstance(data, dict):
        raise MalformedCredentials("login body must be a JSON object")
    try:
        return LoginRequest.model_validate(data, strict=True)
    except ValidationError as e:
        raise MalformedCredentials("login body is missing a string password") from e


class CredentialVerifier:
    """
    Checks a submitted secret against the configured one and issues the session cookie value.

    The config is injected once and never re-read, so concurrent calls need no locking.
    """

    def __init__(self, cfg: GateConfig):
        self._cfg = cfg

    @property
    def config(self) -> GateConfig:
        return self._cfg

    def ensure_configured(self) -> str:
        """Return the configured secret, or raise ConfigurationError without looking at any input."""
        expected = self._cfg.ui_password
        if not expected:
            logger.error("UI_PASSWORD environment variable is not set")
            raise ConfigurationError("UI_PASSWORD is not configured")
        return expected

    def verify(self, submitted: str) -> str:
        """
        Verify `submitted` and return the session cookie value on success.

        Raises:
            ConfigurationError: UI_PASSWORD is not set (checked before any comparison)
            AuthenticationFailed: the secret does not match
        """
        expected = self.ensure_configured()

        # Constant-time; no early exit on the first differing byte.
        # surrogatepass: a lone surrogate is a valid JSON string and just a wrong password.
        submitted_bytes = submitted.encode("utf-8", "surrogatepass")
        if not hmac.compare_digest(submitted_bytes, expected.encode("utf-8", "surrogatepass")):
            logger.warning("Login rejected: invalid password")
            raise AuthenticationFailed("invalid password")

        logger.info("Login accepted")
        return encode_session(self._cfg)
