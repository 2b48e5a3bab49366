"""
Caller identity types.

Users (who ask) and sellers (who answer) live in separate stores keyed by
username. Both resolve to the same `Identity` shape, tagged with a `Role`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Role(str, Enum):
    USER = "USER"
    SELLER = "SELLER"


ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True)
class Caller:
    """
    Authenticated principal as carried by the access token, not yet looked up
    in any store.
    """

    username: str
    roles: tuple[str, ...] = field(default_factory=tuple)

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def may_moderate(self) -> bool:
        return self.has_role(Role.SELLER.value) or self.has_role(ADMIN_ROLE)


@dataclass(frozen=True)
class Identity:
    username: str
    role: Role
    is_admin: bool = False

    def roles(self) -> list[str]:
        roles = [self.role.value]
        if self.is_admin:
            roles.append(ADMIN_ROLE)
        return roles
