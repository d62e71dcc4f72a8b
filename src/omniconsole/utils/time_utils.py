from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Naive UTC timestamp, matching what MongoDB hands back for stored datetimes
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
