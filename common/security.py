"""
Boutique - Security Utilities
==============================
Password hashing behind a small hasher interface, so the auth service can run
with bcrypt in production and a fast stand-in under test.
"""

import logging

import bcrypt

from config.settings import BCRYPT_ROUNDS

logger = logging.getLogger("boutique.security")

# bcrypt only ever reads the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


def _secret_bytes(secret: str) -> bytes:
    return secret.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptHasher:
    """Salted, deliberately slow one-way hash with a tunable work factor."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, secret: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_secret_bytes(secret), salt).decode("utf-8")

    def verify(self, secret: str, digest: str) -> bool:
        """Check a secret against a stored digest. A malformed digest never matches."""
        if not digest:
            return False
        try:
            return bcrypt.checkpw(_secret_bytes(secret), digest.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt digest")
            return False
