"""Identity services - password hashing."""

from safeplay_identity.services.password_service import PasswordHashingService

__all__ = ["PasswordHashingService"]
