"""Password hashing service using bcrypt.

Provides salted one-way password hashing, constant-time verification and
length validation.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

import bcrypt

from safeplay_identity.exceptions import WeakPasswordError

# bcrypt rejects (or silently truncates) anything past 72 bytes
BCRYPT_MAX_PASSWORD_BYTES = 72

if TYPE_CHECKING:
    from safeplay_config import Settings


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.
    Also provides password strength validation.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hashed = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hashed)
    True
    >>> service.verify("wrong_password", hashed)
    False
    """

    # Password requirements
    MIN_LENGTH = 8
    MAX_LENGTH = BCRYPT_MAX_PASSWORD_BYTES

    def __init__(
        self,
        rounds: int = 12,
        min_length: int = MIN_LENGTH,
        max_length: int = MAX_LENGTH,
    ):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12.
            Higher values are more secure but slower.
        min_length
            Minimum password length in characters
        max_length
            Maximum password length in UTF-8 bytes
        """
        self._rounds = rounds
        self._min_length = min_length
        self._max_length = min(max_length, self.MAX_LENGTH)

    @classmethod
    def from_settings(cls, settings: Settings) -> PasswordHashingService:
        return cls(
            rounds=settings.bcrypt_rounds,
            min_length=settings.password_min_length,
            max_length=settings.password_max_length,
        )

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def rehash(self, password: str) -> str:
        """Hash an already-accepted password with the current work factor.

        Used to upgrade stored hashes after a successful login, so the
        current length policy is not applied again. Only the first 72
        bytes are hashed, which is all bcrypt ever compared.

        Parameters
        ----------
        password
            The plaintext password that just verified

        Returns
        -------
        The bcrypt hash as a string
        """
        encoded = password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        bcrypt.checkpw compares in constant time.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt hash to verify against

        Returns
        -------
        True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError, AttributeError):
            # Invalid hash format or over-long password
            return False

    def dummy_hash(self) -> str:
        """Hash a random throwaway secret with the configured work factor.

        Verifying against this hash costs the same as a real check, which
        keeps unknown-user logins from returning measurably faster.
        """
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(secrets.token_urlsafe(32).encode("utf-8"), salt).decode(
            "utf-8"
        )

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets length requirements.

        Parameters
        ----------
        password
            The password to validate

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self._min_length:
            msg = f"Password must be at least {self._min_length} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self._max_length:
            msg = f"Password cannot exceed {self._max_length} bytes"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a password hash was made with a different work factor.

        Parameters
        ----------
        password_hash
            The existing hash to check

        Returns
        -------
        True if the hash should be regenerated
        """
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                current_rounds = int(parts[2])
                return current_rounds != self._rounds
        except (ValueError, IndexError, AttributeError):
            pass
        return True
