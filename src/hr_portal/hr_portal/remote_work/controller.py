from __future__ import annotations

import logging

from flask import Flask, jsonify, redirect, request

from ..core.enums import ApplicationType
from ..core.exceptions import EligibilityError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_ELIGIBILITY_STATUS = {
    "not_found": 404,
    "not_permanent": 403,
    "limit": 403,
    "overlap": 409,
}


def register(app: Flask, container) -> None:
    @app.route("/api/remote-work/validate", methods=["GET"], endpoint="remote_work_validate")
    def validate():
        service = container.remote_work_service
        try:
            result = service.check_eligibility(
                emp_id=request.args.get("empId", ""),
                from_date=request.args.get("fromDate"),
                to_date=request.args.get("toDate"),
                number_of_days=request.args.get("numberOfDays"),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            logger.exception("Remote work eligibility check failed")
            return jsonify({"error": "Failed to validate remote work eligibility", "details": str(e)}), 500

        body = {"canApply": result.allowed, "reason": result.reason, "isPermanent": result.is_permanent}
        if result.code == "not_found":
            return jsonify(body), 404
        if result.is_permanent:
            body["usage"] = service.usage(result)
        return jsonify(body)

    @app.route("/api/remote-work/applications", methods=["GET"], endpoint="remote_work_list")
    def list_applications():
        try:
            apps = container.remote_work_service.list_applications(
                emp_id=request.args.get("empId"),
                pending_only=request.args.get("type") == "pending",
            )
            return jsonify([a.to_dict() for a in apps])
        except Exception:
            logger.exception("Failed to fetch remote applications")
            return jsonify({"error": "Failed to fetch remote applications"}), 500

    @app.route("/api/remote-work/applications", methods=["POST"], endpoint="remote_work_create")
    def create_application():
        payload = request.get_json(silent=True) or {}
        try:
            application_id = container.remote_work_service.submit(
                emp_id=payload.get("empId", ""),
                from_date=payload.get("fromDate"),
                to_date=payload.get("toDate"),
                number_of_days=payload.get("numberOfDays"),
                reason=payload.get("reason"),
            )
            return (
                jsonify(
                    {
                        "success": True,
                        "message": "Remote work application submitted successfully",
                        "id": application_id,
                    }
                ),
                201,
            )
        except EligibilityError as e:
            return jsonify({"error": e.reason, "code": e.code}), _ELIGIBILITY_STATUS.get(e.code, 403)
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            logger.exception("Failed to create remote work application")
            return jsonify({"error": "Failed to create remote work application", "details": str(e)}), 500

    @app.route("/api/remote-work/applications", methods=["DELETE"], endpoint="remote_work_delete")
    def delete_application():
        try:
            container.remote_work_service.delete(request.args.get("id"))
            return jsonify({"success": True, "message": "Remote work application deleted successfully"})
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            logger.exception("Failed to delete remote work application")
            return jsonify({"error": "Failed to delete remote work application", "details": str(e)}), 500

    @app.route("/api/remote-work/email-approval", methods=["GET"], endpoint="remote_work_email_approval")
    def email_approval():
        workflow = container.approval_workflow
        intent = workflow.act_on_token(
            application_type=ApplicationType.REMOTE,
            token=request.args.get("token"),
            action=request.args.get("action"),
            role=request.args.get("role"),
        )
        return redirect(intent.to_url(workflow.base_url))
