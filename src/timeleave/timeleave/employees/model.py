from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import NOT_SPECIFIED


@dataclass(frozen=True)
class IdentitySnapshot:
    """Name/department/designation copied onto a record when it is created."""

    employee_name: str
    department_name: str
    designation_name: str


@dataclass(frozen=True)
class EmployeeProfile:
    """Domain entity: the acting employee as resolved by the identity provider."""

    employee_id: int
    name: str
    department_name: str | None = None
    designation_name: str | None = None

    def snapshot(self) -> IdentitySnapshot:
        return IdentitySnapshot(
            employee_name=self.name,
            department_name=self.department_name or NOT_SPECIFIED,
            designation_name=self.designation_name or NOT_SPECIFIED,
        )
