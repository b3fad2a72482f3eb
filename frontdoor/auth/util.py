from __future__ import annotations


def sanitize_next_path(next_path: str | None) -> str:
    """
    Prevent open-redirects: allow only relative paths like `/dashboard`.
    """
    # Strip control whitespace first: browsers drop CR/LF/TAB from URLs, so `/\n/evil.com` means `//evil.com`.
    p = (next_path or "").replace("\r", "").replace("\n", "").replace("\t", "").strip()
    if not p:
        return "/"
    if not p.startswith("/"):
        return "/"
    # Disallow scheme-relative: `//evil.com` (and the backslash variant browsers normalise).
    if p.startswith("//") or p.startswith("/\\"):
        return "/"
    return p
