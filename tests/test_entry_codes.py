from __future__ import annotations

import sys
import uuid
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.entry_codes import InvalidPayloadError, invitation_url, is_uuid, normalize_entry_code


CODE = "123e4567-e89b-12d3-a456-426614174000"


def test_bare_code_is_trimmed() -> None:
    assert normalize_entry_code(f"  {CODE}\n") == CODE


@pytest.mark.parametrize(
    "payload",
    [
        f"http://localhost:5173/invitacion/{CODE}",
        f"https://event.example.org/invitacion/{CODE}?utm_source=qr",
        f"https://example.com/invitacion/{CODE}#top",
        f"https://example.com/invitacion/{CODE}?a=1#frag",
        f"/invitacion/{CODE}",
    ],
)
def test_invitation_url_yields_code(payload: str) -> None:
    assert normalize_entry_code(payload) == CODE


def test_invitation_url_round_trip() -> None:
    for _ in range(20):
        code = str(uuid.uuid4())
        assert normalize_entry_code(invitation_url("https://example.com/", code)) == code


def test_non_uuid_codes_pass_through_unchanged() -> None:
    # No shape validation on this path
    assert normalize_entry_code("ABC-123") == "ABC-123"


@pytest.mark.parametrize("payload", ["", "   ", "ab", " x ", None])
def test_short_payloads_rejected(payload) -> None:
    with pytest.raises(InvalidPayloadError):
        normalize_entry_code(payload)


def test_uuid_predicate() -> None:
    assert is_uuid(CODE)
    assert is_uuid(CODE.upper())
    assert not is_uuid("")
    assert not is_uuid("not-a-uuid")
    assert not is_uuid(CODE + "0")
    assert not is_uuid(CODE + "\n")
    assert not is_uuid(CODE.replace("-", ""))
    assert not is_uuid("g23e4567-e89b-12d3-a456-426614174000")


def test_invitation_url_format() -> None:
    assert invitation_url("https://example.com", CODE) == f"https://example.com/invitacion/{CODE}"
