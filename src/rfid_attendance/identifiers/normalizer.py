"""Badge identifier normalization.

Readers post whatever their firmware produces: a JSON object, bare text, or
bytes with stray characters around the card number. Everything is reduced to a
canonical UID (uppercase hex, at least ``MIN_UID_LENGTH`` characters).

When the body is not valid JSON, the first run of six or more hex characters
(either case) is taken as the UID. Hex letters trailing an ordinary word are
dropped from the front of a run when at least six characters remain, so
``"garbage123ABCDE7more"`` yields ``123ABCDE7`` while ``"tagDEADBEEF"`` keeps
``DEADBEEF``. This recovery is lossy and is kept as a fallback for readers
that send unframed data.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping

from ..core.constants import MIN_UID_LENGTH
from ..core.enums import TapCode
from ..core.exceptions import UidRejectedError

logger = logging.getLogger(__name__)

_HEX_RUN_RE = re.compile(r"[A-Fa-f0-9]+")
_WORD_TAIL_RE = re.compile(r"^[A-Fa-f]+")
_NON_HEX_RE = re.compile(r"[^0-9A-F]")


def canonicalize_uid(value: Any) -> str:
    """Strip, uppercase and drop every character outside ``0-9A-F``."""
    return _NON_HEX_RE.sub("", str(value).strip().upper())


def _decode(raw: bytes | bytearray) -> str:
    return bytes(raw).decode("utf-8", errors="replace")


def _first_hex_run(text: str) -> str | None:
    for match in _HEX_RUN_RE.finditer(text):
        run = match.group(0)
        start = match.start()
        if start > 0 and text[start - 1].isalpha():
            # "garbage123..." does not lend its "e" to the run
            trimmed = _WORD_TAIL_RE.sub("", run)
            if len(trimmed) >= MIN_UID_LENGTH:
                run = trimmed
        if len(run) >= MIN_UID_LENGTH:
            return run
    return None


def _recover_from_text(text: str) -> dict:
    run = _first_hex_run(text)
    if run is None:
        raise UidRejectedError(TapCode.MALFORMED_BODY, "Malformed body and UID could not be extracted")
    logger.debug("UID recovered from unparsable body: %s", run)
    return {"uid": run.upper()}


def parse_tap_payload(raw: Any) -> Mapping[str, Any]:
    """Turn a request body into a mapping that should carry a ``uid`` field."""
    if isinstance(raw, Mapping):
        return raw

    if raw is None:
        return {}

    text = _decode(raw) if isinstance(raw, (bytes, bytearray)) else str(raw)
    if not text.strip():
        return {}

    try:
        parsed = json.loads(text)
    except ValueError as e:
        logger.debug("JSON parse failed: %s", e)
        return _recover_from_text(text)

    if isinstance(parsed, Mapping):
        return parsed
    # Bare JSON scalars (e.g. a quoted card number) go through recovery too
    return _recover_from_text(text)


def normalize_uid(raw: Any) -> str:
    """Return the canonical UID for a raw tap body.

    Raises UidRejectedError with MALFORMED_BODY, MISSING_UID or INVALID_UID.
    """
    payload = parse_tap_payload(raw)

    uid = payload.get("uid")
    if not uid:
        raise UidRejectedError(TapCode.MISSING_UID, "UID is required")

    clean = canonicalize_uid(uid)
    if len(clean) < MIN_UID_LENGTH:
        raise UidRejectedError(TapCode.INVALID_UID, "Invalid UID format")
    return clean
