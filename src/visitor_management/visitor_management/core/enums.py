from __future__ import annotations

from enum import Enum


class VisitorStatus(str, Enum):
    """Lifecycle state of one visit, stored as-is in the visitors table."""

    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    PRE_REGISTERED = "pre_registered"
