"""Password hashing and bearer tokens for trainer accounts.

Passwords are stored as salted PBKDF2-SHA256 digests. Tokens are random
strings handed to the client once; only their SHA-256 hash is stored.
"""

import hashlib
import hmac
import secrets
from datetime import timedelta

PBKDF2_ITERATIONS = 200_000
MIN_PASSWORD_LENGTH = 6
TOKEN_TTL = timedelta(days=7)


def hash_password(password: str) -> str:
    """Hash a password as ``<salt hex>$<digest hex>``."""
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash in constant time."""
    try:
        salt_hex, digest_hex = password_hash.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
    except ValueError:
        return False
    got = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(expected, got)


def generate_token() -> str:
    """New bearer token (plaintext, only returned once)."""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """One-way hash under which a token is stored."""
    return hashlib.sha256(token.encode()).hexdigest()
