from datetime import datetime, timezone

from keylight_exporter.core.timeutil import archive_stamp
from keylight_exporter.storage.archive import PollArchive


def test_archive_stamp_format():
    ts = datetime(2024, 1, 31, 23, 59, 58, 123, tzinfo=timezone.utc)
    assert archive_stamp(ts) == "20240131235958.000123"


def test_store_writes_raw_body(tmp_path):
    ts = datetime(2024, 5, 1, 8, 30, 0, 42, tzinfo=timezone.utc)
    path = PollArchive(tmp_path).store(ts, b'{"raw": true}')

    assert path == tmp_path / "20240501083000.000042"
    assert path.read_bytes() == b'{"raw": true}'


def test_store_failure_is_swallowed(tmp_path):
    missing = tmp_path / "does-not-exist"
    ts = datetime(2024, 5, 1, tzinfo=timezone.utc)

    assert PollArchive(missing).store(ts, b"x") is None
    assert not missing.exists()
