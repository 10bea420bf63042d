# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Password hashing for accounts migrated from CUBA.

Two hash formats live side by side in ``hemishe_user.password``:

- bcrypt (``$2a$``, ``$2b$``, ``$2y$``), written by this service.
- CUBA ``hash:salt:iterations``: base64 PBKDF2-HMAC-SHA1 with a
  160-bit key, written by the old application.

New hashes are always bcrypt; CUBA hashes are replaced after the next
successful login.

Example:
    >>> hasher = PasswordHasher()
    >>> hasher.verify("secret", "dGVzdA==:c2FsdA==:1000")
    False
    >>> hasher.needs_upgrade("dGVzdA==:c2FsdA==:1000")
    True
"""

import base64
import binascii
import hashlib
import hmac
import logging

import bcrypt

logger = logging.getLogger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
CUBA_KEY_LENGTH = 20  # 160 bits


class PasswordHasher:
    """Verify bcrypt and CUBA hashes, create bcrypt hashes.

    Attributes:
        _rounds: Number of bcrypt rounds for new hashes.
    """

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt.

        Raises:
            ValueError: If password is empty.
        """
        if not password:
            raise ValueError("Password cannot be empty")

        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a bcrypt or CUBA hash.

        Args:
            password: Plain text password.
            password_hash: Stored hash in either format.

        Returns:
            True if the password matches.
        """
        if not password or not password_hash:
            return False

        if password_hash.startswith(BCRYPT_PREFIXES):
            return self._verify_bcrypt(password, password_hash)
        return self._verify_cuba(password, password_hash)

    def needs_upgrade(self, password_hash: str) -> bool:
        """Check whether a stored hash should be replaced with bcrypt."""
        if not password_hash:
            return False
        return not password_hash.startswith(BCRYPT_PREFIXES)

    @staticmethod
    def _verify_bcrypt(password: str, password_hash: str) -> bool:
        # $2y$ (PHP) is the same algorithm as $2b$
        if password_hash.startswith("$2y$"):
            password_hash = "$2b$" + password_hash[4:]
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError as e:
            logger.warning("Password verification failed: %s", str(e))
            return False

    @staticmethod
    def _verify_cuba(password: str, password_hash: str) -> bool:
        parts = password_hash.split(":")
        if len(parts) != 3:
            logger.warning("Unrecognised password hash format")
            return False

        encoded_hash, encoded_salt, iterations = parts
        try:
            expected = base64.b64decode(encoded_hash, validate=True)
            salt = base64.b64decode(encoded_salt, validate=True)
            rounds = int(iterations)
        except (binascii.Error, ValueError) as e:
            logger.warning("Malformed CUBA password hash: %s", str(e))
            return False
        if rounds < 1:
            return False

        actual = hashlib.pbkdf2_hmac(
            "sha1", password.encode("utf-8"), salt, rounds, dklen=CUBA_KEY_LENGTH
        )
        return hmac.compare_digest(actual, expected)


def make_cuba_hash(password: str, salt: bytes, iterations: int = 1000) -> str:
    """Build a CUBA ``hash:salt:iterations`` string.

    Only used to seed accounts in the old format (fixtures, imports).
    """
    digest = hashlib.pbkdf2_hmac(
        "sha1", password.encode("utf-8"), salt, iterations, dklen=CUBA_KEY_LENGTH
    )
    return ":".join(
        (
            base64.b64encode(digest).decode("ascii"),
            base64.b64encode(salt).decode("ascii"),
            str(iterations),
        )
    )
