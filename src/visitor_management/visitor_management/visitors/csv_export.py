from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable

from ..common.datetime_utils import isoformat_or_none
from .model import Visitor

CSV_HEADERS = [
    "ID",
    "Name",
    "Email",
    "Phone",
    "Company",
    "Purpose",
    "Host",
    "Department",
    "Check In",
    "Check Out",
    "Status",
]


def _row(v: Visitor) -> list:
    text = [
        v.name,
        v.email,
        v.phone,
        v.company,
        v.purpose,
        v.host_name,
        v.host_department,
        isoformat_or_none(v.check_in_time),
        isoformat_or_none(v.check_out_time),
        v.status.value,
    ]
    # The id stays numeric (unquoted); everything else is a quoted string.
    return [int(v.id)] + ["" if value is None else str(value) for value in text]


def visitors_to_csv(visitors: Iterable[Visitor]) -> str:
    """Header row, then one row per visitor in the given order.

    Every text field is double-quoted and embedded quotes are doubled, so commas,
    quotes and newlines in free text survive a round-trip through any CSV reader.
    """

    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for v in visitors:
        writer.writerow(_row(v))
    return out.getvalue()


def export_filename(today: date) -> str:
    return f"visitors-{today.isoformat()}.csv"
