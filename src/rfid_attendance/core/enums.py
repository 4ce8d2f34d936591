from __future__ import annotations

from enum import Enum


class TapType(str, Enum):
    """Kind of tap event stored in the attendance ledger."""

    TAP_IN = "tap-in"
    TAP_OUT = "tap-out"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class TapCode(str, Enum):
    """Response codes returned by the tap endpoint."""

    SUCCESS = "SUCCESS"
    NOT_REGISTERED = "NOT_REGISTERED"
    LIMIT_REACHED = "LIMIT_REACHED"
    MALFORMED_BODY = "MALFORMED_BODY"
    MISSING_UID = "MISSING_UID"
    INVALID_UID = "INVALID_UID"
    SERVER_ERROR = "SERVER_ERROR"
