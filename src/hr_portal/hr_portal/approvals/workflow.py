"""Email-driven approval state machine for leave and remote-work applications.

Submission pre-issues a manager token and an HR token and mails both
approvers concurrently. Clicking an emailed link lands in `act_on_token`,
which re-reads the application and moves it through a conditional update so
that a second click on the same link is reported as already processed.
"""
from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional

from ..core.enums import ApplicationType, ApprovalAction, ApproverRole
from ..notifications import templates
from ..notifications.mailer import Mailer
from ..tokens.codec import ApprovalTokenCodec
from .factory import ApprovalHandlerFactory
from .model import ApprovalSubject, RedirectIntent

logger = logging.getLogger(__name__)

MISSING_PARAMETERS = "Missing required parameters"
INVALID_ACTION = "Invalid action"
INVALID_ROLE = "Invalid role"
ROLE_MISMATCH = "Invalid role for this token"
TYPE_MISMATCH = "Invalid token for this application type"
UNEXPECTED_ERROR = "An error occurred while processing your request"


class ApprovalWorkflow:
    def __init__(
        self,
        *,
        handlers: ApprovalHandlerFactory,
        codec: ApprovalTokenCodec,
        mailer: Mailer,
        hr_email: str,
        base_url: str,
        employee_email_domain: str = "vis.com.pk",
        executor: Optional[Executor] = None,
    ):
        self._handlers = handlers
        self._codec = codec
        self._mailer = mailer
        self._hr_email = hr_email
        self._base_url = base_url
        self._employee_email_domain = employee_email_domain
        self._executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix="approval-mail")

    @property
    def base_url(self) -> str:
        return self._base_url

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    def _send_safely(self, *, to: str, subject: str, html: str) -> bool:
        try:
            self._mailer.send(to=to, subject=subject, html=html)
            return True
        except Exception:
            logger.exception("Failed to send email '%s' to %s", subject, to)
            return False

    def _employee_address(self, subject: ApprovalSubject) -> str:
        return subject.employee_email or f"{subject.emp_id}@{self._employee_email_domain}"

    def submit(self, application_type: ApplicationType, application_id: int) -> list[Future]:
        """Queue the manager and HR request emails. Never raises on delivery problems."""

        handler = self._handlers.for_type(application_type)
        application = handler.fetch(application_id)
        if application is None:
            logger.warning("Cannot notify approvers: %s application %s not found", application_type, application_id)
            return []

        subject = handler.to_subject(application)
        manager_token = self._codec.issue(subject.application_id, subject.application_type, ApproverRole.MANAGER)
        hr_token = self._codec.issue(subject.application_id, subject.application_type, ApproverRole.HR)

        futures: list[Future] = []
        if subject.manager_email:
            futures.append(
                self._executor.submit(
                    self._send_safely,
                    to=subject.manager_email,
                    subject=templates.request_subject(subject),
                    html=templates.request_email(
                        subject, role=ApproverRole.MANAGER, token=manager_token, base_url=self._base_url
                    ),
                )
            )
        else:
            logger.info("No reporting manager email for %s; only HR is notified", subject.emp_id)

        futures.append(
            self._executor.submit(
                self._send_safely,
                to=self._hr_email,
                subject=templates.request_subject(subject),
                html=templates.request_email(subject, role=ApproverRole.HR, token=hr_token, base_url=self._base_url),
            )
        )
        return futures

    def act_on_token(
        self,
        *,
        application_type: ApplicationType,
        token: Optional[str],
        action: Optional[str],
        role: Optional[str],
    ) -> RedirectIntent:
        try:
            return self._act(application_type=application_type, token=token, action=action, role=role)
        except Exception:
            logger.exception("Email approval failed for %s", application_type)
            return RedirectIntent.error(UNEXPECTED_ERROR)

    def _act(self, *, application_type, token, action, role) -> RedirectIntent:
        if not token or not action or not role:
            return RedirectIntent.error(MISSING_PARAMETERS)

        check = self._codec.verify(token)
        if not check.valid:
            return RedirectIntent.error(check.error or "Invalid or expired token")
        claims = check.data

        try:
            act = ApprovalAction(action)
        except ValueError:
            return RedirectIntent.error(INVALID_ACTION)
        try:
            approver = ApproverRole(role)
        except ValueError:
            return RedirectIntent.error(INVALID_ROLE)

        if claims.role != approver:
            return RedirectIntent.error(ROLE_MISMATCH)

        handler = self._handlers.for_type(application_type)
        if claims.application_type != handler.application_type:
            return RedirectIntent.error(TYPE_MISMATCH)

        application = handler.fetch(claims.application_id)
        if application is None:
            return RedirectIntent.error(handler.not_found_message)

        blocked = handler.blocked_reason(application, approver)
        if blocked:
            return RedirectIntent.error(blocked)

        subject = handler.to_subject(application)
        approved = act == ApprovalAction.APPROVE
        if approver == ApproverRole.MANAGER:
            decided_by = subject.manager_name or templates.role_title(ApproverRole.MANAGER)
        else:
            decided_by = templates.role_title(ApproverRole.HR)

        if not handler.apply(
            application_id=claims.application_id, role=approver, approved=approved, decided_by=decided_by
        ):
            # Lost the race against a concurrent click; report the state that won.
            current = handler.fetch(claims.application_id)
            reason = handler.blocked_reason(current, approver) if current is not None else None
            return RedirectIntent.error(reason or handler.not_found_message)

        logger.info(
            "%s application %s %s by %s",
            subject.label,
            subject.application_id,
            "approved" if approved else "rejected",
            approver.value,
        )

        self._send_safely(
            to=self._employee_address(subject),
            subject=templates.status_subject(subject, approved=approved, role=approver),
            html=templates.status_email(subject, approved=approved, role=approver, decided_by=decided_by),
        )

        verdict = "approved" if approved else "rejected"
        return RedirectIntent(
            success=True,
            message=f"{subject.label} application {verdict} successfully",
            action=verdict,
            role=approver.value,
            application_type=subject.application_type.value,
            employee=subject.employee_name,
        )
