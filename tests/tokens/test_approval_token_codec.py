from __future__ import annotations

import base64
import json

import pytest

from src.hr_portal.hr_portal.core.enums import ApplicationType, ApproverRole
from src.hr_portal.hr_portal.tokens.codec import ApprovalTokenCodec


class FakeClock:
    def __init__(self, now: float):
        self.now = now

    def __call__(self) -> float:
        return self.now


def _codec(clock=None) -> ApprovalTokenCodec:
    return ApprovalTokenCodec("s3cret", clock=clock or FakeClock(1_700_000_000))


def test_round_trip_returns_same_claims():
    codec = _codec()
    token = codec.issue(42, ApplicationType.REMOTE, ApproverRole.MANAGER)

    check = codec.verify(token)

    assert check.valid is True
    assert check.error is None
    assert check.data.application_id == 42
    assert check.data.application_type == ApplicationType.REMOTE
    assert check.data.role == ApproverRole.MANAGER


def test_payload_is_unpadded_base64url_json_with_exp_in_seconds():
    clock = FakeClock(1_700_000_000)
    token = _codec(clock).issue(7, ApplicationType.LEAVE, ApproverRole.HR)

    segment = token.split(".")[0]
    assert "=" not in token
    payload = json.loads(base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4)))
    assert payload == {"id": 7, "type": "leave", "role": "hr", "exp": 1_700_000_000 + 72 * 3600}


@pytest.mark.parametrize("position", [0, 5, -1])
def test_mutating_signature_character_invalidates_token(position):
    codec = _codec()
    token = codec.issue(1, ApplicationType.LEAVE, ApproverRole.MANAGER)
    payload, signature = token.split(".")
    chars = list(signature)
    chars[position] = "A" if chars[position] != "A" else "B"

    check = codec.verify(f"{payload}.{''.join(chars)}")

    assert check.valid is False
    assert check.error == "Invalid token signature"


def test_token_signed_with_other_secret_is_rejected():
    token = ApprovalTokenCodec("other", clock=FakeClock(1_700_000_000)).issue(1, ApplicationType.LEAVE, ApproverRole.HR)
    assert _codec().verify(token).error == "Invalid token signature"


@pytest.mark.parametrize("token", ["", "abc", "a.b.c", ".sig", "payload."])
def test_malformed_tokens_report_format_error(token):
    check = _codec().verify(token)
    assert check.valid is False
    assert check.error == "Invalid token format"


def test_expired_token_is_rejected():
    clock = FakeClock(1_700_000_000)
    codec = _codec(clock)
    token = codec.issue(3, ApplicationType.REMOTE, ApproverRole.HR, ttl_hours=1)

    clock.now += 3600
    assert codec.verify(token).valid is True

    clock.now += 1
    check = codec.verify(token)
    assert check.valid is False
    assert check.error == "Token has expired"


def test_signed_garbage_payload_fails_verification():
    codec = _codec()
    segment = base64.urlsafe_b64encode(b'{"id": "x"}').rstrip(b"=").decode()
    token = f"{segment}.{codec._sign(segment)}"

    check = codec.verify(token)

    assert check.valid is False
    assert check.error == "Token verification failed"


def test_non_ascii_signature_is_rejected_not_raised():
    codec = _codec()
    payload = codec.issue(1, ApplicationType.LEAVE, ApproverRole.HR).split(".")[0]
    assert codec.verify(f"{payload}.ü").error == "Invalid token signature"


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        ApprovalTokenCodec("")
