from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlencode

GOOGLE_CALENDAR_BASE = "https://calendar.google.com/calendar/render?action=TEMPLATE"


def to_utc_stamp(dt: datetime) -> str:
    """iCalendar UTC form, e.g. 20261021T213000Z. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def build_ics(booking_id, title: str, start: datetime, end: datetime,
              description: str = "", location: Optional[str] = None,
              domain: str = "ericfadezz.local", now: Optional[datetime] = None) -> str:
    """
    Build a single-event iCalendar document for a booking.
    Lines are CRLF separated; LOCATION is left out when empty.
    """
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//ericfadezz//Bookings//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "BEGIN:VEVENT",
        f"UID:{booking_id}@{domain}",
        f"DTSTAMP:{to_utc_stamp(now or datetime.now(timezone.utc))}",
        f"DTSTART:{to_utc_stamp(start)}",
        f"DTEND:{to_utc_stamp(end)}",
        f"SUMMARY:{title}",
        "DESCRIPTION:" + (description or "").replace("\n", "\\n"),
        f"LOCATION:{location}" if location else None,
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(line for line in lines if line)


def build_google_calendar_url(title: str, start: datetime, end: datetime,
                              details: str = "", location: str = "") -> str:
    params = {
        "text": title,
        "details": details or "",
        "dates": f"{to_utc_stamp(start)}/{to_utc_stamp(end)}",
        "location": location or "",
    }
    return f"{GOOGLE_CALENDAR_BASE}&{urlencode(params)}"
