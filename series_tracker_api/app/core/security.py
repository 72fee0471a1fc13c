"""
Password hashing helpers.

Passwords are hashed with PBKDF2-HMAC using SHA-256 and a random
per-password salt.  The stored form is ``<salt hex>$<hash hex>`` so
that verification can recompute the digest with the same salt.  The
rest of the application treats these two functions as an opaque
one-way hash/verify capability.
"""

import hashlib
import hmac
import os

ITERATIONS = 100_000

# Verified against when a login names an unknown e-mail so that both
# failure paths perform the same amount of work.
_DUMMY_HASH = f"{'00' * 16}${'00' * 32}"


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    A 16-byte random salt is generated for each password.

    Parameters
    ----------
    password : str
        The plain text password to hash.

    Returns
    -------
    str
        Salt and hash concatenated with ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string.

    Splits the stored string into salt and hash, recomputes the
    PBKDF2-HMAC digest and compares it using constant-time comparison.
    A malformed stored value never matches.
    """
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (AttributeError, ValueError):
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def burn_verification(plain_password: str) -> None:
    """Run a verification whose result is discarded."""
    verify_password(plain_password, _DUMMY_HASH)
