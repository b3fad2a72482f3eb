"""
Static route classification for the request gate.

Every path maps to exactly one RouteClass: the first matching rule in ROUTE_TABLE wins and
anything unmatched is PROTECTED. The table is data, not code, so tests can enumerate it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Tuple

LOGIN_PATH = "/login"
LOGIN_API_PATH = "/api/auth/login"
HEALTH_PATH = "/api/health"
BOOTSTRAP_PATH = "/api/admin/populate-embeddings"


class RouteClass(str, Enum):
    ASSET = "asset"  # never intercepted
    PUBLIC = "public"  # intercepted, admitted without a session
    PROTECTED = "protected"  # requires a valid session cookie


@dataclass(frozen=True)
class RouteRule:
    name: str
    matches: Callable[[str], bool]
    route_class: RouteClass


def exact(value: str) -> Callable[[str], bool]:
    return lambda path: path == value


def prefix(value: str) -> Callable[[str], bool]:
    return lambda path: path.startswith(value)


def pattern(regex: str) -> Callable[[str], bool]:
    compiled = re.compile(regex)
    return lambda path: compiled.search(path) is not None


# Order matters: asset exclusions are checked before the allow-list.
ROUTE_TABLE: Tuple[RouteRule, ...] = (
    RouteRule("static-bundle", prefix("/_next/static"), RouteClass.ASSET),
    RouteRule("image-optimizer", prefix("/_next/image"), RouteClass.ASSET),
    RouteRule("favicon", prefix("/favicon.ico"), RouteClass.ASSET),
    RouteRule("image-file", pattern(r"\.(?:svg|png|jpg|jpeg|gif|webp)$"), RouteClass.ASSET),
    RouteRule("login-page", exact(LOGIN_PATH), RouteClass.PUBLIC),
    RouteRule("auth-api", prefix("/api/auth/"), RouteClass.PUBLIC),
    RouteRule("health", exact(HEALTH_PATH), RouteClass.PUBLIC),
    RouteRule("bootstrap", prefix(BOOTSTRAP_PATH), RouteClass.PUBLIC),
)


def classify_path(path: str) -> RouteClass:
    for rule in ROUTE_TABLE:
        if rule.matches(path):
            return rule.route_class
    return RouteClass.PROTECTED
