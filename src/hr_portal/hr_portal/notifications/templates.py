from __future__ import annotations

from datetime import date
from html import escape
from urllib.parse import urlencode

from ..approvals.model import ApprovalSubject
from ..core.enums import ApplicationType, ApproverRole

_ROUTE_SEGMENT = {
    ApplicationType.LEAVE: "leaves",
    ApplicationType.REMOTE: "remote-work",
}

_ROLE_TITLE = {
    ApproverRole.MANAGER: "Reporting Manager",
    ApproverRole.HR: "HR Department",
}


def _fmt(day: date) -> str:
    return day.strftime("%d %b %Y")


def _days(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def role_title(role: ApproverRole) -> str:
    return _ROLE_TITLE[ApproverRole(role)]


def action_link(base_url: str, application_type: ApplicationType, *, token: str, action: str, role: ApproverRole) -> str:
    query = urlencode({"token": token, "action": action, "role": ApproverRole(role).value})
    return f"{base_url.rstrip('/')}/api/{_ROUTE_SEGMENT[ApplicationType(application_type)]}/email-approval?{query}"


def _details_table(subject: ApprovalSubject) -> str:
    rows = [
        ("Employee", f"{subject.employee_name} ({subject.emp_id})"),
        ("From", _fmt(subject.from_date)),
        ("To", _fmt(subject.to_date)),
        ("Number of days", _days(subject.number_of_days)),
    ]
    if subject.detail:
        rows.insert(1, ("Leave type", subject.detail))
    if subject.reason:
        rows.append(("Reason", subject.reason))
    if subject.application_date:
        rows.append(("Applied on", subject.application_date.strftime("%d %b %Y %H:%M")))

    body = "".join(
        f'<tr><td style="padding:6px 12px;color:#6b7280">{escape(k)}</td>'
        f'<td style="padding:6px 12px;font-weight:600">{escape(str(v))}</td></tr>'
        for k, v in rows
    )
    return f'<table style="border-collapse:collapse;background:#f9fafb;border-radius:8px">{body}</table>'


def _button(href: str, text: str, color: str) -> str:
    return (
        f'<a href="{escape(href)}" style="display:inline-block;padding:10px 20px;margin-right:8px;'
        f'background:{color};color:#fff;text-decoration:none;border-radius:6px;font-weight:600">{escape(text)}</a>'
    )


def request_subject(subject: ApprovalSubject) -> str:
    return f"{subject.label} Application - {subject.employee_name}"


def request_email(subject: ApprovalSubject, *, role: ApproverRole, token: str, base_url: str) -> str:
    """Approval request sent to the manager or HR with approve/reject links."""

    approve = action_link(base_url, subject.application_type, token=token, action="approve", role=role)
    reject = action_link(base_url, subject.application_type, token=token, action="reject", role=role)
    note = ""
    if subject.application_type == ApplicationType.LEAVE and ApproverRole(role) == ApproverRole.HR:
        note = "<p>HR approval becomes available once the reporting manager has approved.</p>"

    return (
        '<div style="font-family:Segoe UI,Arial,sans-serif;color:#111827">'
        f"<h2>New {escape(subject.label)} Application</h2>"
        f"<p>{escape(subject.employee_name)} has submitted a {escape(subject.label.lower())} application "
        f"that needs your decision as {escape(role_title(role))}.</p>"
        f"{_details_table(subject)}"
        f"{note}"
        f'<p style="margin-top:20px">{_button(approve, "Approve", "#10b981")}{_button(reject, "Reject", "#ef4444")}</p>'
        '<p style="color:#6b7280;font-size:12px">These links expire after a limited time.</p>'
        "</div>"
    )


def status_subject(subject: ApprovalSubject, *, approved: bool, role: ApproverRole) -> str:
    verdict = "Approved" if approved else "Rejected"
    by = "Manager" if ApproverRole(role) == ApproverRole.MANAGER else "HR"
    return f"{subject.label} Application {verdict} by {by}"


def status_email(subject: ApprovalSubject, *, approved: bool, role: ApproverRole, decided_by: str) -> str:
    """Outcome notification sent to the employee."""

    verdict = "approved" if approved else "rejected"
    color = "#10b981" if approved else "#ef4444"
    return (
        '<div style="font-family:Segoe UI,Arial,sans-serif;color:#111827">'
        f"<h2>Your {escape(subject.label.lower())} application was "
        f'<span style="color:{color}">{verdict}</span></h2>'
        f"<p>Dear {escape(subject.employee_name)},</p>"
        f"<p>Your application has been {verdict} by {escape(decided_by)} ({escape(role_title(role))}).</p>"
        f"{_details_table(subject)}"
        "</div>"
    )
