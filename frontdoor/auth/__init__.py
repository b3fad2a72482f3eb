"""
Shared-secret authentication gate.

Design goals:
- One configured password, no user accounts.
- Stateless: the session lives entirely in an HttpOnly cookie.
- Every request is classified by path before any handler runs.
"""
