from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_upstream_date
from ..core.exceptions import ValidationError
from ..gateway.errors import GatewayError, GatewayTimeoutError

logger = logging.getLogger(__name__)


def _parse_sync_date(value: Optional[str], field_name: str) -> Optional[date]:
    """Accept DD/MM/YYYY (device format) or YYYY-MM-DD."""

    text = (value or "").strip()
    if not text:
        return None
    try:
        return parse_upstream_date(text)
    except ValueError:
        pass
    try:
        return datetime.strptime(text[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be DD/MM/YYYY or YYYY-MM-DD")


def _gateway_failure(e: GatewayError):
    status = 504 if isinstance(e, GatewayTimeoutError) else 502
    return (
        jsonify(
            {
                "success": False,
                "error": str(e),
                "kind": e.kind,
                "upstreamStatus": e.status,
                "details": e.details,
            }
        ),
        status,
    )


def register(app: Flask, container) -> None:
    @app.route("/api/attendance/sync", methods=["POST"], endpoint="attendance_sync_punches")
    def sync_punches():
        try:
            payload = request.get_json(silent=True) or {}
            today = now_local().date()
            start = _parse_sync_date(payload.get("start_date"), "start_date") or today
            end = _parse_sync_date(payload.get("end_date"), "end_date") or start
            if end < start:
                raise ValidationError("end_date must not be before start_date")

            result = container.sync_service.sync_punches(start, end)
            body = result.to_dict()
            body["message"] = (
                "Attendance data synced successfully" if result.total else "No attendance data to sync"
            )
            return jsonify(body)
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except GatewayError as e:
            logger.warning("Attendance sync failed upstream: %s", e)
            return _gateway_failure(e)
        except Exception as e:
            logger.exception("Attendance sync failed")
            return jsonify({"success": False, "error": "Failed to sync attendance data", "details": str(e)}), 500

    @app.route("/api/attendance/sync", methods=["GET"], endpoint="attendance_sync_employees")
    def sync_employees():
        try:
            result = container.sync_service.sync_employees()
            return jsonify(
                {
                    "success": True,
                    "message": "Employees synced successfully",
                    "synced": result.synced,
                    "updated": result.updated,
                    "total": result.total,
                }
            )
        except GatewayError as e:
            logger.warning("Employee roster sync failed upstream: %s", e)
            return _gateway_failure(e)
        except Exception as e:
            logger.exception("Employee roster sync failed")
            return jsonify({"success": False, "error": "Failed to sync employees", "details": str(e)}), 500

    @app.route("/api/attendance/sync/status", methods=["GET"], endpoint="attendance_sync_status")
    def sync_status():
        status = container.sync_scheduler.status()
        message = "Sync service is running" if status["isRunning"] else "Sync service is stopped"
        return jsonify({"success": True, "message": message, **status})

    @app.route("/api/attendance/sync/status", methods=["POST"], endpoint="attendance_sync_trigger")
    def sync_trigger():
        run = container.sync_scheduler.trigger()
        body = run.to_dict()
        if run.error:
            return jsonify(body), 502
        return jsonify(body)

    @app.route("/api/attendance/weekly", methods=["POST"], endpoint="attendance_weekly")
    def weekly():
        try:
            payload = request.get_json(silent=True) or {}
            try:
                year = int(payload.get("year"))
                month = int(payload.get("month"))
            except (TypeError, ValueError):
                raise ValidationError("year and month must be numbers")

            weeks = container.report_service.monthly_summary(
                employee_id=str(payload.get("employeeId") or ""),
                year=year,
                month=month,
            )
            return jsonify({"success": True, "weeks": [w.to_dict() for w in weeks]})
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except Exception as e:
            logger.exception("Weekly attendance summary failed")
            return jsonify({"success": False, "error": "Failed to build weekly summary", "details": str(e)}), 500
