from __future__ import annotations

import logging

from flask import Flask, jsonify, redirect, request

from ..core.enums import ApplicationType
from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container) -> None:
    @app.route("/api/leaves/applications", methods=["GET"], endpoint="leaves_list")
    def list_applications():
        try:
            leaves = container.leave_service.list_applications(emp_id=request.args.get("empId"))
            return jsonify([leave.to_dict() for leave in leaves])
        except Exception:
            logger.exception("Failed to fetch leave applications")
            return jsonify({"error": "Failed to fetch leave applications"}), 500

    @app.route("/api/leaves/applications", methods=["POST"], endpoint="leaves_create")
    def create_application():
        payload = request.get_json(silent=True) or {}
        try:
            application_id = container.leave_service.submit(
                emp_id=payload.get("empId", ""),
                leave_type_id=payload.get("leaveType"),
                from_date=payload.get("fromDate"),
                to_date=payload.get("toDate"),
                number_of_days=payload.get("numberOfDays"),
                leave_day_type=payload.get("leaveDayType"),
                reason=payload.get("reason"),
                leave_address=payload.get("leaveAddress"),
            )
            return (
                jsonify({"success": True, "message": "Leave application submitted successfully", "id": application_id}),
                201,
            )
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            logger.exception("Failed to create leave application")
            return jsonify({"error": "Failed to create leave application", "details": str(e)}), 500

    @app.route("/api/leaves/email-approval", methods=["GET"], endpoint="leaves_email_approval")
    def email_approval():
        workflow = container.approval_workflow
        intent = workflow.act_on_token(
            application_type=ApplicationType.LEAVE,
            token=request.args.get("token"),
            action=request.args.get("action"),
            role=request.args.get("role"),
        )
        return redirect(intent.to_url(workflow.base_url))
