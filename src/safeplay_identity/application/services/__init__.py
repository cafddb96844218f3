"""Application services for identity management."""

from safeplay_identity.application.services.user_service import UserService

__all__ = ["UserService"]
