"""CSV export helpers for the admin tables"""
import csv
import io
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel

from breadmade.models.booking import StrategyCallBooking

PURCHASES_FILENAME = "purchases-export.csv"
LEASE_REQUESTS_FILENAME = "lease-requests-export.csv"
LEADS_FILENAME = "leads-export.csv"

BOOKING_HEADERS = [
    "Name",
    "Email",
    "Phone",
    "Company",
    "Preferred Date",
    "Preferred Time",
    "Timezone",
    "Created At",
]

Row = Union[Mapping[str, Any], BaseModel]


def _as_dict(row: Row) -> Mapping[str, Any]:
    if isinstance(row, BaseModel):
        return row.model_dump(mode="json")
    return row


def _cell(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _write(header_line: Optional[str], rows: Iterable[List[str]]) -> str:
    buf = io.StringIO()
    if header_line is not None:
        buf.write(header_line + "\n")
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    return buf.getvalue().rstrip("\n")


def export_to_csv(rows: List[Row]) -> str:
    """
    Render rows as CSV with a header taken from the first row's keys

    Every value is quoted and embedded quotes are doubled; missing or empty
    values become empty strings. No rows gives an empty string.
    """
    if not rows:
        return ""
    records = [_as_dict(row) for row in rows]
    keys = list(records[0].keys())
    return _write(",".join(keys), ([_cell(record.get(key)) for key in keys] for record in records))


def bookings_to_csv(bookings: List[StrategyCallBooking]) -> str:
    """Strategy call bookings with fixed headers and ``N/A`` for missing phone or company"""
    return _write(
        ",".join(BOOKING_HEADERS),
        (
            [
                booking.name,
                booking.email,
                booking.phone_number or "N/A",
                booking.company or "N/A",
                booking.preferred_date.isoformat(),
                booking.preferred_time_slot,
                booking.timezone,
                booking.created_at.isoformat(),
            ]
            for booking in bookings
        ),
    )


def bookings_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"strategy-call-bookings-{today.isoformat()}.csv"
