"""Signed, expiring approval tokens.

Token layout: ``base64url(json payload) + "." + base64url(HMAC-SHA256(payload segment))``.
The payload is ``{"id", "type", "role", "exp"}`` with ``exp`` in UNIX seconds.
Tokens are never stored; a consumed token is rejected by the workflow
re-checking the application state.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import time
from typing import Callable, Union

from ..core.constants import DEFAULT_TOKEN_TTL_HOURS
from ..core.enums import ApplicationType, ApproverRole
from .model import ApprovalClaims, TokenCheck


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(segment: str) -> bytes:
    padding = "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(segment + padding)


class ApprovalTokenCodec:
    def __init__(
        self,
        secret: Union[str, bytes],
        *,
        ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS,
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ValueError("Approval token secret must not be empty")
        self._secret = secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)
        self._ttl_hours = int(ttl_hours)
        self._clock = clock

    def _sign(self, payload_segment: str) -> str:
        digest = hmac.new(self._secret, payload_segment.encode("utf-8"), hashlib.sha256).digest()
        return _b64encode(digest)

    def issue(
        self,
        application_id: int,
        application_type: ApplicationType,
        role: ApproverRole,
        ttl_hours: int | None = None,
    ) -> str:
        hours = self._ttl_hours if ttl_hours is None else int(ttl_hours)
        payload = {
            "id": int(application_id),
            "type": ApplicationType(application_type).value,
            "role": ApproverRole(role).value,
            "exp": int(self._clock()) + hours * 3600,
        }
        segment = _b64encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
        return f"{segment}.{self._sign(segment)}"

    def verify(self, token: str) -> TokenCheck:
        parts = (token or "").split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            return TokenCheck.fail("Invalid token format")

        segment, signature = parts
        if not hmac.compare_digest(signature.encode("utf-8"), self._sign(segment).encode("ascii")):
            return TokenCheck.fail("Invalid token signature")

        try:
            payload = json.loads(_b64decode(segment).decode("utf-8"))
            claims = ApprovalClaims(
                application_id=int(payload["id"]),
                application_type=ApplicationType(payload["type"]),
                role=ApproverRole(payload["role"]),
                expires_at=int(payload["exp"]),
            )
        except (binascii.Error, UnicodeDecodeError, ValueError, KeyError, TypeError):
            return TokenCheck.fail("Token verification failed")

        if self._clock() > claims.expires_at:
            return TokenCheck.fail("Token has expired")

        return TokenCheck.ok(claims)
