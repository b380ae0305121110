from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ApplicationType, ApproverRole


@dataclass(frozen=True)
class ApprovalClaims:
    """Decoded contents of an approval token."""

    application_id: int
    application_type: ApplicationType
    role: ApproverRole
    expires_at: int


@dataclass(frozen=True)
class TokenCheck:
    """Outcome of verifying a token. Failures are data, never exceptions."""

    valid: bool
    data: Optional[ApprovalClaims] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, claims: ApprovalClaims) -> "TokenCheck":
        return cls(valid=True, data=claims)

    @classmethod
    def fail(cls, error: str) -> "TokenCheck":
        return cls(valid=False, error=error)
