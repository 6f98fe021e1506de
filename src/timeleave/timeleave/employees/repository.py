from __future__ import annotations

from typing import Protocol

from .model import EmployeeProfile


class IdentityProvider(Protocol):
    """Resolves the acting employee's profile.

    Note: services depend on this interface, never on a concrete database.
    """

    def get_profile(self, employee_id: int) -> EmployeeProfile | None:
        raise NotImplementedError
