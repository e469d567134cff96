"""Password hashing utilities using Argon2."""

import argon2

from core.config import PasswordConfig

_hasher = argon2.PasswordHasher()


def configure_hasher(config: PasswordConfig) -> None:
    """Replace the module hasher with one using the configured cost."""
    global _hasher
    _hasher = argon2.PasswordHasher(
        time_cost=config.time_cost,
        memory_cost=config.memory_cost,
        parallelism=config.parallelism,
    )


def hash_password(password: str) -> str:
    """Hash a password using Argon2."""
    return _hasher.hash(password)


def verify_password(password: str, hash: str) -> bool:
    """Verify a password against a hash.

    Returns True if the password matches, False otherwise. A malformed
    stored hash counts as a mismatch.
    """
    try:
        _hasher.verify(hash, password)
        return True
    except (argon2.exceptions.VerificationError, argon2.exceptions.InvalidHashError):
        return False


def needs_rehash(hash: str) -> bool:
    """True when the hash was made with different cost parameters."""
    return _hasher.check_needs_rehash(hash)
