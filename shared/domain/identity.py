"""
Caller identity

The authentication layer resolves the request user once into an Actor;
domain operations receive the Actor as a parameter and check capabilities
against the explicit Role enumeration.
"""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    USER = 'USER'
    ADMIN = 'ADMIN'


@dataclass(frozen=True)
class Actor:
    """The verified caller of a domain operation."""
    user_id: int
    role: Role = Role.USER

    @classmethod
    def from_user(cls, user) -> 'Actor':
        """Build an Actor from an authenticated user model instance."""
        return cls(user_id=user.pk, role=Role(user.role))

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def owns(self, owner_id) -> bool:
        return self.user_id == owner_id
