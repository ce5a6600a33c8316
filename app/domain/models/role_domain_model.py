# app/domain/models/role_domain_model.py

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple


class EntityRole(str, Enum):
    """Process-wide singleton roles, one per provisioned entity kind."""

    ASSOCIACAO = "associacao"
    CATADOR = "catador"

    @property
    def description(self) -> str:
        return f"Usuário {self.value}"


class RoleLookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RoleLookupResult:
    """
    Outcome of resolving role names to identifiers.

    `NOT_FOUND` means at least one requested name has no role record;
    `role_ids` then holds the ids of the names that do exist.
    """
    status: RoleLookupStatus
    role_ids: Tuple[int, ...] = ()
    missing_names: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def found(cls, role_ids: Sequence[int]) -> "RoleLookupResult":
        return cls(status=RoleLookupStatus.FOUND, role_ids=tuple(role_ids))

    @classmethod
    def not_found(cls, role_ids: Sequence[int], missing_names: Sequence[str]) -> "RoleLookupResult":
        return cls(
            status=RoleLookupStatus.NOT_FOUND,
            role_ids=tuple(role_ids),
            missing_names=tuple(missing_names),
        )

    @property
    def is_found(self) -> bool:
        return self.status is RoleLookupStatus.FOUND

    def ids(self) -> List[int]:
        return list(self.role_ids)
