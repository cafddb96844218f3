from enum import Enum


class UserRole(str, Enum):
    """User roles (players are supervised, supervisors watch players)."""

    PLAYER = "player"
    SUPERVISOR = "supervisor"
