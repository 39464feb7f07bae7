from __future__ import annotations

from datetime import datetime, timedelta, timezone

COMPANIES = ("Analytica", "ByteForge", "CloudNine", "Delta Labs", "Epsilon")
STATUSES = ("active", "trial", "churned")


def iso_millis(value: datetime) -> str:
    """Render a UTC timestamp the way browsers do: millisecond precision and a Z suffix."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_customer_rows(count: int, *, now: datetime | None = None) -> list[dict[str, str]]:
    reference = now or datetime.now(timezone.utc)
    rows = []
    for index in range(count):
        number = index + 1
        rows.append(
            {
                "id": f"c_{number:03d}",
                "name": f"User {number}",
                "email": f"user{number}@example.com",
                "company": COMPANIES[index % len(COMPANIES)],
                "status": STATUSES[index % len(STATUSES)],
                "createdAt": iso_millis(reference - timedelta(days=index)),
            }
        )
    return rows
