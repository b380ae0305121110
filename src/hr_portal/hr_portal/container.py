from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType

from .approvals.factory import ApprovalHandlerFactory
from .approvals.handlers.leave_handler import LeaveApprovalHandler
from .approvals.handlers.remote_work_handler import RemoteWorkApprovalHandler
from .approvals.workflow import ApprovalWorkflow
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.office_hours import OfficeHoursPolicy
from .attendance.reconciler import AttendanceReconciler
from .attendance.report_service import AttendanceReportService
from .attendance.summary import MonthlySummaryBuilder
from .attendance.sync_service import AttendanceSyncService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .gateway.client import AttendanceGateway
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .notifications.mailer import SmtpMailer
from .remote_work.eligibility import RemoteWorkEligibility
from .remote_work.mysql_remote_work_repository import MySQLRemoteWorkRepository
from .remote_work.service import RemoteWorkService
from .scheduler.service import AttendanceSyncScheduler
from .tokens.codec import ApprovalTokenCodec


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    employees_repo: MySQLEmployeeRepository
    holidays_repo: MySQLHolidayRepository
    leaves_repo: MySQLLeaveRepository
    remote_work_repo: MySQLRemoteWorkRepository

    gateway: AttendanceGateway
    sync_service: AttendanceSyncService
    report_service: AttendanceReportService
    approval_workflow: ApprovalWorkflow
    remote_work_service: RemoteWorkService
    leave_service: LeaveService
    sync_scheduler: AttendanceSyncScheduler


def build_container(settings: ModuleType) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    attendance_repo = MySQLAttendanceRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    remote_work_repo = MySQLRemoteWorkRepository(conn)

    gateway = AttendanceGateway(
        getattr(settings, "ATTENDANCE_API_BASE_URL"),
        device_id=getattr(settings, "ATTENDANCE_API_DEVICE_ID", "1"),
        timeout=getattr(settings, "ATTENDANCE_API_TIMEOUT", 10),
        verify_ssl=getattr(settings, "ATTENDANCE_API_VERIFY_SSL", True),
    )
    sync_service = AttendanceSyncService(gateway, AttendanceReconciler(attendance_repo))

    policy = OfficeHoursPolicy.from_lists(
        ten_hour=getattr(settings, "TEN_HOUR_EMPLOYEES", ()),
        nine_hour=getattr(settings, "NINE_HOUR_EMPLOYEES", ()),
    )
    report_service = AttendanceReportService(attendance_repo, holidays_repo, MonthlySummaryBuilder(policy))

    mailer = SmtpMailer(
        host=getattr(settings, "SMTP_HOST", ""),
        port=getattr(settings, "SMTP_PORT", 587),
        username=getattr(settings, "SMTP_USER", None),
        password=getattr(settings, "SMTP_PASS", None),
        sender=getattr(settings, "SMTP_FROM", None),
        use_ssl=getattr(settings, "SMTP_USE_SSL", False),
    )
    codec = ApprovalTokenCodec(
        getattr(settings, "APPROVAL_TOKEN_SECRET", None) or getattr(settings, "SECRET_KEY"),
        ttl_hours=getattr(settings, "APPROVAL_TOKEN_TTL_HOURS", 72),
    )
    approval_workflow = ApprovalWorkflow(
        handlers=ApprovalHandlerFactory(
            [
                LeaveApprovalHandler(leaves_repo, employees_repo),
                RemoteWorkApprovalHandler(remote_work_repo, employees_repo),
            ]
        ),
        codec=codec,
        mailer=mailer,
        hr_email=getattr(settings, "HR_EMAIL", "hr@vis.com.pk"),
        base_url=getattr(settings, "APP_BASE_URL", "http://localhost:3000"),
        employee_email_domain=getattr(settings, "EMPLOYEE_EMAIL_DOMAIN", "vis.com.pk"),
    )

    remote_work_service = RemoteWorkService(
        remote_work_repo,
        employees_repo,
        RemoteWorkEligibility(employees_repo, remote_work_repo),
        workflow=approval_workflow,
    )
    leave_service = LeaveService(leaves_repo, employees_repo, workflow=approval_workflow)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        holidays_repo=holidays_repo,
        leaves_repo=leaves_repo,
        remote_work_repo=remote_work_repo,
        gateway=gateway,
        sync_service=sync_service,
        report_service=report_service,
        approval_workflow=approval_workflow,
        remote_work_service=remote_work_service,
        leave_service=leave_service,
        sync_scheduler=AttendanceSyncScheduler(sync_service),
    )
