import datetime as dt


def now_iso() -> str:
    """UTC timestamp in ISO-8601 with millisecond precision, e.g. 2026-01-01T00:00:00.000Z"""
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
