from __future__ import annotations

import re


MIN_PAYLOAD_LENGTH = 3
INVITATION_MARKER = "/invitacion/"

_UUID_RE = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE)


class InvalidPayloadError(ValueError):
    """Scanner payload is empty or too short to hold an entry code."""


def normalize_entry_code(payload: str) -> str:
    """Extract the candidate entry code from decoded QR text.

    The QR may hold the bare code or a full invitation URL such as
    ``https://host/invitacion/<code>?utm=x``; in the latter case the code is the
    text after the marker, cut at the first ``?`` or ``#``.
    """
    text = (payload or "").strip()
    if len(text) < MIN_PAYLOAD_LENGTH:
        raise InvalidPayloadError("QR payload too short")

    if INVITATION_MARKER in text:
        tail = text.split(INVITATION_MARKER, 1)[1]
        return re.split(r"[?#]", tail, maxsplit=1)[0]
    return text


def is_uuid(value: str) -> bool:
    return bool(_UUID_RE.fullmatch(value or ""))


def invitation_url(base_url: str, entry_code: str) -> str:
    return f"{base_url.rstrip('/')}{INVITATION_MARKER}{entry_code}"
