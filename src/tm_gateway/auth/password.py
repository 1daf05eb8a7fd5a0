"""Password hashing with the ``bcrypt`` library (>=4.0)."""

import bcrypt


def hash_password(plain: str) -> str:
    """Hash a plain-text password; returns the utf-8 bcrypt hash."""
    hashed: bytes = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
