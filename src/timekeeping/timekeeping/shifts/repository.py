from __future__ import annotations

from typing import Optional, Protocol

from .model import Department


class DepartmentRepository(Protocol):
    def get_for_user(self, user_id: str) -> Optional[Department]:
        """Department the user belongs to, or None when unassigned."""

        raise NotImplementedError
