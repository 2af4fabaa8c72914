# =============================================================================
# lib/security.py - Password Hashing
# =============================================================================
# Passwords are never stored as given. pbkdf2_sha256 is implemented by
# passlib itself and needs no native backend.
# =============================================================================

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)
