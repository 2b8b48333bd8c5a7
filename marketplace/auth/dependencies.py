from __future__ import annotations

from fastapi import HTTPException, Request


def get_current_user(request: Request) -> dict | None:
    """Return the signed-in user (``{email, role}``) from the session, or ``None``."""
    return request.session.get("user")


def get_viewer_email(request: Request) -> str | None:
    """Email of the signed-in viewer; anonymous browsing yields ``None``."""
    user = get_current_user(request)
    return user.get("email") if user else None


def require_user(request: Request) -> dict:
    user = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(request: Request) -> dict:
    """Raise 401 if not logged in, 403 if not admin."""
    user = require_user(request)
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
