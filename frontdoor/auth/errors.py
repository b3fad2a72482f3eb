from __future__ import annotations


class AuthError(Exception):
    """Base class for credential verification failures. Each subclass maps to one HTTP status."""

    status_code = 500
    public_message = "An error occurred during login"


class ConfigurationError(AuthError):
    """UI_PASSWORD is not configured; nobody can authenticate."""

    status_code = 500
    public_message = "Server configuration error"


class AuthenticationFailed(AuthError):
    status_code = 401
    public_message = "Invalid password"


class MalformedCredentials(AuthError):
    status_code = 400
    public_message = "Invalid request body"
