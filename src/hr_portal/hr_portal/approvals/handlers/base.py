from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from ...core.enums import ApplicationType, ApproverRole
from ..model import ApprovalSubject


class ApprovalHandler(ABC):
    """Strategy Pattern: how one application type is loaded, guarded and decided."""

    application_type: ApplicationType
    not_found_message: str

    @abstractmethod
    def fetch(self, application_id: int) -> Optional[Any]:
        raise NotImplementedError

    @abstractmethod
    def to_subject(self, application: Any) -> ApprovalSubject:
        raise NotImplementedError

    @abstractmethod
    def blocked_reason(self, application: Any, role: ApproverRole) -> Optional[str]:
        """Why `role` may not act on the application in its current state, or None."""

        raise NotImplementedError

    @abstractmethod
    def apply(self, *, application_id: int, role: ApproverRole, approved: bool, decided_by: str) -> bool:
        """Atomic conditional transition. False when the guarded stage already moved."""

        raise NotImplementedError
