"""CSV export of RSVP responses."""
import csv
import io

from app.models import RSVPResponse

CSV_HEADERS = ["Name", "Email", "Phone", "Attendance", "Submitted At"]


def export_csv(responses: list[RSVPResponse]) -> str:
    """
    Flatten responses into a CSV table.

    Columns are the guest's name, email, phone and attendance answers plus
    the submission date (``YYYY-MM-DD``). Missing answers are empty cells.
    Values containing commas, quotes or newlines are quoted.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for r in responses:
        writer.writerow([
            r.responses.get("name", ""),
            r.responses.get("email", ""),
            r.responses.get("phone", ""),
            r.responses.get("attendance", ""),
            r.submitted_at.date().isoformat(),
        ])
    return buffer.getvalue()


def export_filename(event_id: str) -> str:
    return f"rsvp-responses-{event_id}.csv"
