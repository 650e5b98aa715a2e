"""
Tests for report field selection and JSON rendering.
"""
import io
import json
from datetime import datetime, timedelta, timezone

import pytest

from volume_info.config import ReportConfig
from volume_info.models import TimeRecord, VolumeReport
from volume_info.reporter import OUTPUT_FIELDS, output_keys, render_report, select_fields, write_report

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def make_report() -> VolumeReport:
    def record(name: str, seconds_ago: float) -> TimeRecord:
        return TimeRecord(
            path=f"/volume/dir/{name}",
            file_name=name,
            time=NOW - timedelta(seconds=seconds_ago),
        )

    return VolumeReport(
        mount_point="/volume",
        is_empty=False,
        last_access=record("read.txt", 10.9),
        last_modify=record("write.txt", 3600),
        last_change=record("chmod.txt", 60),
    )


def test_empty_volume_output():
    """Test the exact output for an empty volume."""
    report = VolumeReport(mount_point="/volume", is_empty=True)
    config = ReportConfig(output_file_infos=True, all_times=True)

    text = render_report(report, config, now=NOW)

    assert text == '{\n  "mountPoint": "/volume",\n  "isEmpty": true\n}\n'


def test_default_keys():
    """Test lastChange, lastBirth and fileInfos are absent by default."""
    data = json.loads(render_report(make_report(), ReportConfig(), now=NOW))

    assert list(data) == ["mountPoint", "isEmpty", "lastAccess", "lastModify"]


def test_all_times_keys():
    """Test ALL_TIMES adds change and birth records."""
    data = json.loads(render_report(make_report(), ReportConfig(all_times=True), now=NOW))

    assert list(data) == [
        "mountPoint", "isEmpty", "lastAccess", "lastModify", "lastChange", "lastBirth",
    ]
    assert data["lastChange"]["fileName"] == "chmod.txt"
    assert data["lastBirth"] == {"path": "", "fileName": "", "time": None, "secondsSince": None}


def test_file_infos_key():
    """Test OUTPUT_FILE_INFOS adds the per-entry list."""
    data = json.loads(render_report(make_report(), ReportConfig(output_file_infos=True), now=NOW))

    assert "fileInfos" in data
    assert data["fileInfos"] == []
    assert "lastChange" not in data


def test_time_record_shape_and_seconds_since():
    """Test record fields and truncated secondsSince."""
    data = json.loads(render_report(make_report(), ReportConfig(), now=NOW))

    access = data["lastAccess"]
    assert set(access) == {"path", "fileName", "time", "secondsSince"}
    assert access["path"] == "/volume/dir/read.txt"
    assert access["fileName"] == "read.txt"
    assert access["secondsSince"] == 10
    assert parse_time(access["time"]) == NOW - timedelta(seconds=10.9)
    assert data["lastModify"]["secondsSince"] == 3600


def test_seconds_since_truncates_toward_zero():
    """Test a timestamp in the future truncates toward zero as well."""
    record = TimeRecord(path="/volume/f", file_name="f", time=NOW + timedelta(seconds=2.5))

    assert record.since(NOW).seconds_since == -2


def test_zero_record_since_is_unchanged():
    assert TimeRecord().since(NOW) == TimeRecord()


def test_select_fields_rejects_unknown_keys():
    """Test only whitelisted keys may be selected."""
    with pytest.raises(ValueError):
        select_fields(make_report(), ["mountPoint", "secret"], NOW)


def test_select_fields_subset():
    data = select_fields(make_report(), ["isEmpty"], NOW)

    assert data == {"isEmpty": False}


def test_output_keys_are_whitelisted():
    config = ReportConfig(output_file_infos=True, all_times=True)

    assert set(output_keys(make_report(), config)) == set(OUTPUT_FIELDS)


def test_write_report_to_stream():
    """Test the report is written once with a trailing newline."""
    stream = io.StringIO()

    write_report(make_report(), ReportConfig(), stream=stream, now=NOW)

    text = stream.getvalue()
    assert text.endswith("}\n")
    assert text.startswith('{\n  "mountPoint": "/volume",')
    assert json.loads(text)["isEmpty"] is False
