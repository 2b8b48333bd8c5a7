from __future__ import annotations

from typing import Any

import bcrypt

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _seed_users() -> None:
    """Pre-seed demo accounts on import; each owns listings in the bundled catalog."""
    _users["ayse@example.com"] = {"password_hash": _hash_password("ayse123"), "role": "user"}
    _users["mehmet@example.com"] = {"password_hash": _hash_password("mehmet123"), "role": "user"}
    _users["zeynep@example.com"] = {"password_hash": _hash_password("zeynep123"), "role": "user"}
    _users["admin@example.com"] = {"password_hash": _hash_password("admin123"), "role": "admin"}


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{email, role}`` or ``None``."""
    key = email.strip().lower()
    record = _users.get(key)
    if record and _verify_password(password, record["password_hash"]):
        return {"email": key, "role": record["role"]}
    return None


_seed_users()
