"""Authenticated principal passed explicitly into listing and messaging services."""

from dataclasses import dataclass
from uuid import UUID

from .models import CustomUser


@dataclass(frozen=True)
class Principal:
    """The caller of a core operation: who they are and which role they hold."""

    id: UUID
    role: str = CustomUser.Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == CustomUser.Role.ADMIN

    @classmethod
    def from_user(cls, user: CustomUser) -> "Principal":
        return cls(id=user.id, role=user.role)

