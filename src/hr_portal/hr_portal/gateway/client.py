"""HTTP client for the biometric attendance device API.

Endpoints (``ID`` selects the device):

- ``GET  /APIUsers?ID=1`` -> ``{"data": [employee, ...]}``
- ``POST /APILogs?ID=1`` with ``{"start_date", "end_date"}`` as DD/MM/YYYY
  -> a bare list or ``{"data": [log, ...]}``

The upstream service sometimes answers 200 OK with a Java/SQL stack trace in
the body; such bodies are reported as :class:`GatewayResponseError`.
No retries happen here.
"""
from __future__ import annotations

import json
import logging
import re
from datetime import date
from typing import Any, Optional

import requests

from ..common.datetime_utils import format_upstream_date, parse_punch_time
from ..core.constants import GATEWAY_MAX_TIMEOUT_SECONDS, GATEWAY_MIN_TIMEOUT_SECONDS
from ..core.enums import PunchState
from ..attendance.model import DeviceEmployee, PunchEvent, PunchLogBatch
from .errors import GatewayConnectionError, GatewayError, GatewayResponseError, GatewayTimeoutError

logger = logging.getLogger(__name__)

UPSTREAM_ERROR_MARKERS = re.compile(r"java\.sql\.|Exception")


class AttendanceGateway:
    def __init__(
        self,
        base_url: str,
        *,
        device_id: str = "1",
        timeout: float = GATEWAY_MAX_TIMEOUT_SECONDS,
        verify_ssl: bool = True,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._device_id = str(device_id)
        self._timeout = min(max(float(timeout), GATEWAY_MIN_TIMEOUT_SECONDS), GATEWAY_MAX_TIMEOUT_SECONDS)
        self._verify_ssl = bool(verify_ssl)
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json", "User-Agent": "HR-Portal/1.0"})

    @property
    def timeout(self) -> float:
        return self._timeout

    def _request(self, method: str, path: str, **kwargs) -> str:
        url = f"{self._base_url}/{path}"
        try:
            resp = self._session.request(
                method,
                url,
                params={"ID": self._device_id},
                timeout=self._timeout,
                verify=self._verify_ssl,
                **kwargs,
            )
        except requests.Timeout as e:
            raise GatewayTimeoutError(f"Attendance API timed out after {self._timeout:g}s", details=str(e))
        except requests.RequestException as e:
            raise GatewayConnectionError("Attendance API is unreachable", details=str(e))

        if not resp.ok:
            raise GatewayError(
                f"External API returned status {resp.status_code}",
                status=resp.status_code,
                details=resp.text[:500],
            )
        return resp.text

    @staticmethod
    def _decode(body: str) -> Any:
        if UPSTREAM_ERROR_MARKERS.search(body):
            logger.error("Attendance API leaked an error in a 2xx body: %s", body[:200])
            raise GatewayResponseError("External API returned an error", status=200, details=body[:500])
        try:
            return json.loads(body)
        except ValueError:
            raise GatewayResponseError("Invalid JSON response from external API", status=200, details=body[:500])

    @staticmethod
    def _rows(payload: Any) -> list:
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            rows = payload.get("data") or []
            if isinstance(rows, list):
                return rows
        raise GatewayResponseError("Unexpected response shape from external API", status=200)

    def fetch_employees(self) -> list[DeviceEmployee]:
        payload = self._decode(self._request("GET", "APIUsers"))
        employees: list[DeviceEmployee] = []
        for row in self._rows(payload):
            try:
                employees.append(
                    DeviceEmployee(
                        pin_auto=str(row["pin_auto"]),
                        pin_manual=(str(row["pin_manual"]) if row.get("pin_manual") is not None else None),
                        user_name=str(row.get("user_name") or ""),
                        password=row.get("password"),
                        privilege=(str(row["privilege"]) if row.get("privilege") is not None else None),
                    )
                )
            except (KeyError, TypeError) as e:
                logger.warning("Skipping malformed roster row %r: %s", row, e)
        logger.info("Fetched %d employees from attendance API", len(employees))
        return employees

    def fetch_punch_logs(self, start_date: date, end_date: date) -> PunchLogBatch:
        body = {
            "start_date": format_upstream_date(start_date),
            "end_date": format_upstream_date(end_date),
        }
        payload = self._decode(self._request("POST", "APILogs", data=json.dumps(body)))

        events: list[PunchEvent] = []
        rejected = 0
        for row in self._rows(payload):
            try:
                events.append(
                    PunchEvent(
                        employee_external_id=str(row["user_id"]),
                        state=PunchState(str(row["state"]).strip()),
                        timestamp=parse_punch_time(row["punch_time"]),
                        verify_mode=row.get("verify_mode") or None,
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed punch row %r: %s", row, e)
                rejected += 1
        logger.info(
            "Fetched %d punch logs for %s..%s (%d rejected)", len(events), body["start_date"], body["end_date"], rejected
        )
        return PunchLogBatch(events=tuple(events), rejected=rejected)
