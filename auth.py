"""
auth.py
Admin authentication (bcrypt hashing, verify, login, change password).
End users have no password; they only get the read-only view of their own lines.
"""

from __future__ import annotations

import logging

import bcrypt
import db

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _to_bcrypt_secret(password: str) -> bytes:
    """
    bcrypt only uses the first 72 BYTES of the password.
    Truncate explicitly so longer input does not raise.
    """
    pw = password.encode("utf-8")
    if len(pw) > 72:
        pw = pw[:72]
    return pw


def hash_password(password: str) -> str:
    secret = _to_bcrypt_secret(password)
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(secret, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    secret = _to_bcrypt_secret(password)
    return bcrypt.checkpw(secret, password_hash.encode("utf-8"))


def get_admin_by_username(username: str):
    return db.fetch_one("SELECT * FROM admin_users WHERE username = ?", (username,))


def login(username: str, password: str) -> bool:
    admin = get_admin_by_username(username)
    if not admin or not verify_password(password, admin["password_hash"]):
        logger.warning("Failed admin login for %r", username)
        return False
    return True


def validate_new_password(new1: str, new2: str) -> str | None:
    """Returns an error message, or None if the pair is acceptable."""
    if len(new1) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
    if new1 != new2:
        return "Passwords do not match."
    return None


def change_password(username: str, new_password: str) -> None:
    db.execute(
        "UPDATE admin_users SET password_hash = ? WHERE username = ?",
        (hash_password(new_password), username),
    )
    db.clear_force_password_change()
    logger.info("Password changed for %r", username)
