from datetime import datetime, timezone

ARCHIVE_STAMP_FORMAT = "%Y%m%d%H%M%S.%f"


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def archive_stamp(ts: datetime) -> str:
    """File name for a poll started at ``ts``, e.g. ``20240131235959.000123``."""
    return ts.astimezone(timezone.utc).strftime(ARCHIVE_STAMP_FORMAT)
