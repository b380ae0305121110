from __future__ import annotations

from datetime import date, datetime
from types import SimpleNamespace
from urllib.parse import parse_qs, urlsplit

import pytest

from src.hr_portal.hr_portal.approvals.factory import ApprovalHandlerFactory
from src.hr_portal.hr_portal.approvals.handlers.leave_handler import LeaveApprovalHandler
from src.hr_portal.hr_portal.approvals.handlers.remote_work_handler import RemoteWorkApprovalHandler
from src.hr_portal.hr_portal.approvals.workflow import ApprovalWorkflow
from src.hr_portal.hr_portal.attendance.sync_service import SyncResult
from src.hr_portal.hr_portal.core.enums import ApplicationType, ApproverRole, RemoteWorkStatus
from src.hr_portal.hr_portal.employees.model import Employee
from src.hr_portal.hr_portal.gateway.errors import GatewayConnectionError, GatewayTimeoutError
from src.hr_portal.hr_portal.leaves.service import LeaveService
from src.hr_portal.hr_portal.main import create_app
from src.hr_portal.hr_portal.remote_work.eligibility import RemoteWorkEligibility
from src.hr_portal.hr_portal.remote_work.service import RemoteWorkService
from src.hr_portal.hr_portal.scheduler.service import AttendanceSyncScheduler
from src.hr_portal.hr_portal.tokens.codec import ApprovalTokenCodec
from tests.fakes import FakeEmployeesRepo, FakeLeaveRepo, FakeRemoteWorkRepo, ImmediateExecutor, RecordingMailer

BASE_URL = "http://portal.local"


class FakeSyncService:
    def __init__(self):
        self.error = None
        self.calls = []

    def sync_punches(self, start_date, end_date):
        self.calls.append((start_date, end_date))
        if self.error:
            raise self.error
        return SyncResult(synced=2, skipped=0, total=2)

    def sync_employees(self):
        return SimpleNamespace(synced=1, updated=1, total=2)


class FakeWeek:
    def to_dict(self):
        return {"weekNumber": 1, "totalHours": "40:00"}


class FakeReportService:
    def monthly_summary(self, *, employee_id, year, month):
        return [FakeWeek()]


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    employees = FakeEmployeesRepo(
        [
            Employee("E1", "Ayesha Khan", "ayesha@vis.com.pk", date(2023, 1, 1), "M1"),
            Employee("P1", "Probation Pete", None, None, "M1"),
            Employee("M1", "Bilal Ahmed", "bilal@vis.com.pk", date(2020, 1, 1)),
        ]
    )
    leaves = FakeLeaveRepo().bind_employees(employees)
    remote = FakeRemoteWorkRepo()
    codec = ApprovalTokenCodec("http-secret")
    workflow = ApprovalWorkflow(
        handlers=ApprovalHandlerFactory(
            [LeaveApprovalHandler(leaves, employees), RemoteWorkApprovalHandler(remote, employees)]
        ),
        codec=codec,
        mailer=RecordingMailer(),
        hr_email="hr@vis.com.pk",
        base_url=BASE_URL,
        executor=ImmediateExecutor(),
    )
    sync = FakeSyncService()
    container = SimpleNamespace(
        sync_service=sync,
        report_service=FakeReportService(),
        sync_scheduler=AttendanceSyncScheduler(
            sync, clock=lambda: datetime(2025, 3, 10, 10, 30), scheduler_factory=lambda: None
        ),
        approval_workflow=workflow,
        remote_work_service=RemoteWorkService(remote, employees, RemoteWorkEligibility(employees, remote), workflow),
        leave_service=LeaveService(leaves, employees, workflow),
    )
    app = create_app(container=container)
    return SimpleNamespace(client=app.test_client(), sync=sync, remote=remote, leaves=leaves, codec=codec)


def test_health(env):
    assert env.client.get("/health").get_json() == {"status": "ok"}


def test_sync_accepts_device_date_format(env):
    resp = env.client.post("/api/attendance/sync", json={"start_date": "06/10/2025", "end_date": "07/10/2025"})

    assert resp.status_code == 200
    assert resp.get_json()["synced"] == 2
    assert env.sync.calls == [(date(2025, 10, 6), date(2025, 10, 7))]


def test_sync_rejects_inverted_range(env):
    resp = env.client.post("/api/attendance/sync", json={"start_date": "2025-10-07", "end_date": "2025-10-06"})

    assert resp.status_code == 400


@pytest.mark.parametrize(
    "error, status, kind",
    [
        (GatewayTimeoutError("Attendance API timed out"), 504, "timeout"),
        (GatewayConnectionError("Attendance API unreachable"), 502, "unreachable"),
    ],
)
def test_sync_maps_gateway_failures(env, error, status, kind):
    env.sync.error = error

    resp = env.client.post("/api/attendance/sync", json={})

    assert resp.status_code == status
    body = resp.get_json()
    assert body["success"] is False
    assert body["kind"] == kind


def test_employee_roster_sync(env):
    body = env.client.get("/api/attendance/sync").get_json()

    assert body == {"success": True, "message": "Employees synced successfully", "synced": 1, "updated": 1, "total": 2}


def test_sync_status_and_manual_trigger(env):
    status = env.client.get("/api/attendance/sync/status").get_json()
    trigger = env.client.post("/api/attendance/sync/status")

    assert status["isRunning"] is False
    assert status["isWorkingHours"] is True
    assert status["message"] == "Sync service is stopped"
    assert trigger.status_code == 200
    assert trigger.get_json()["message"] == "Manual sync triggered"


def test_manual_trigger_failure_is_bad_gateway(env):
    env.sync.error = GatewayConnectionError("Attendance API unreachable")

    resp = env.client.post("/api/attendance/sync/status")

    assert resp.status_code == 502
    assert resp.get_json()["error"] == "Attendance API unreachable"


def test_weekly_summary(env):
    resp = env.client.post("/api/attendance/weekly", json={"employeeId": "7", "year": 2025, "month": 3})

    assert resp.get_json() == {"success": True, "weeks": [{"weekNumber": 1, "totalHours": "40:00"}]}


def test_weekly_summary_requires_numbers(env):
    resp = env.client.post("/api/attendance/weekly", json={"employeeId": "7", "year": "soon"})

    assert resp.status_code == 400


def test_validate_returns_usage(env):
    resp = env.client.get("/api/remote-work/validate?empId=E1")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["canApply"] is True
    assert body["isPermanent"] is True
    assert body["usage"]["sixMonths"] == {"used": 0, "limit": 4, "remaining": 4}


def test_validate_non_permanent_and_unknown(env):
    probation = env.client.get("/api/remote-work/validate?empId=P1")
    unknown = env.client.get("/api/remote-work/validate?empId=ZZ")
    missing = env.client.get("/api/remote-work/validate")

    assert probation.status_code == 200
    assert probation.get_json() == {
        "canApply": False,
        "reason": "Only permanent employees can apply for remote work",
        "isPermanent": False,
    }
    assert unknown.status_code == 404
    assert missing.status_code == 400


def test_create_remote_application_status_codes(env):
    payload = {"empId": "E1", "fromDate": "2030-03-11", "toDate": "2030-03-11", "reason": "ISP visit"}

    created = env.client.post("/api/remote-work/applications", json=payload)
    overlap = env.client.post("/api/remote-work/applications", json=payload)
    not_permanent = env.client.post("/api/remote-work/applications", json={**payload, "empId": "P1"})
    invalid = env.client.post("/api/remote-work/applications", json={**payload, "fromDate": "tomorrow"})
    understated = env.client.post(
        "/api/remote-work/applications", json={**payload, "toDate": "2030-03-22", "numberOfDays": 1}
    )

    assert created.status_code == 201
    assert created.get_json()["id"] == 1
    assert overlap.status_code == 409
    assert overlap.get_json()["code"] == "overlap"
    assert not_permanent.status_code == 403
    assert invalid.status_code == 400
    assert understated.status_code == 400
    assert env.remote.get(2) is None


def test_list_and_delete_remote_applications(env):
    env.client.post(
        "/api/remote-work/applications", json={"empId": "E1", "fromDate": "2030-03-11", "toDate": "2030-03-12"}
    )

    listed = env.client.get("/api/remote-work/applications?empId=E1&type=pending").get_json()
    deleted = env.client.delete("/api/remote-work/applications?id=1")
    again = env.client.delete("/api/remote-work/applications?id=1")

    assert [a["number_of_days"] for a in listed] == [2]
    assert listed[0]["approval_status"] == "Pending"
    assert deleted.status_code == 200
    assert again.status_code == 404


def test_remote_email_approval_redirects_with_outcome(env):
    env.client.post(
        "/api/remote-work/applications", json={"empId": "E1", "fromDate": "2030-03-11", "toDate": "2030-03-11"}
    )
    token = env.codec.issue(1, ApplicationType.REMOTE, ApproverRole.MANAGER)

    resp = env.client.get(f"/api/remote-work/email-approval?token={token}&action=approve&role=manager")

    assert resp.status_code == 302
    location = urlsplit(resp.headers["Location"])
    query = parse_qs(location.query)
    assert f"{location.scheme}://{location.netloc}{location.path}" == f"{BASE_URL}/leaves"
    assert query["notification"] == ["success"]
    assert query["action"] == ["approved"]
    assert env.remote.get(1).approval_status == RemoteWorkStatus.APPROVED


def test_leave_email_approval_error_redirect(env):
    env.client.post(
        "/api/leaves/applications",
        json={"empId": "E1", "leaveType": 1, "fromDate": "2030-03-11", "toDate": "2030-03-11"},
    )
    token = env.codec.issue(1, ApplicationType.LEAVE, ApproverRole.HR)

    resp = env.client.get(f"/api/leaves/email-approval?token={token}&action=approve&role=hr")

    query = parse_qs(urlsplit(resp.headers["Location"]).query)
    assert resp.status_code == 302
    assert query == {
        "notification": ["error"],
        "message": ["Manager approval is required before HR can approve"],
    }


def test_leave_create_and_list(env):
    created = env.client.post(
        "/api/leaves/applications",
        json={"empId": "E1", "leaveType": 1, "fromDate": "2030-03-11", "toDate": "2030-03-12"},
    )
    missing_type = env.client.post(
        "/api/leaves/applications", json={"empId": "E1", "fromDate": "2030-03-11", "toDate": "2030-03-12"}
    )

    listed = env.client.get("/api/leaves/applications?empId=E1").get_json()

    assert created.status_code == 201
    assert missing_type.status_code == 400
    assert [leave["no_of_days"] for leave in listed] == [2.0]
