from __future__ import annotations

from typing import Iterable

from ..core.enums import ApplicationType
from ..core.exceptions import ValidationError
from .handlers.base import ApprovalHandler


class ApprovalHandlerFactory:
    """Factory Pattern: pick the approval strategy for an application type."""

    def __init__(self, handlers: Iterable[ApprovalHandler]):
        self._handlers = {h.application_type: h for h in handlers}

    def for_type(self, application_type) -> ApprovalHandler:
        try:
            return self._handlers[ApplicationType(application_type)]
        except (KeyError, ValueError):
            raise ValidationError(f"Unsupported application type: {application_type}")
