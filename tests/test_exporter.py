import dataclasses
import datetime as dt
import json

from gtsim_core.io.records import parse_timestamp
from gtsim_core.services import exporter


def test_timestamp_is_separator_free():
    assert exporter.format_timestamp(parse_timestamp("2024-03-05T09:07:00Z")) == "202403050907"


def test_timestamp_uses_display_timezone():
    created = dt.datetime(2024, 3, 5, 9, 7, tzinfo=dt.timezone.utc)
    assert exporter.format_timestamp(created, tz="Asia/Shanghai") == "202403051707"


def test_basename_from_model_name_and_timestamp(record):
    assert exporter.export_basename(record) == "囚徒困境_202403050907"


def test_basename_strips_path_separators(record):
    renamed = dataclasses.replace(record, model=dataclasses.replace(record.model, name="a/b"))
    assert exporter.export_basename(renamed) == "a_b_202403050907"


def test_build_export_artifacts(record, rounds):
    bundle = exporter.build_export(record)
    assert bundle.csv.filename == "囚徒困境_202403050907.csv"
    assert bundle.json.filename == "囚徒困境_202403050907.json"
    assert bundle.csv.content.startswith(b"\xef\xbb\xbf")
    assert bundle.csv.media_type == "text/csv;charset=utf-8"
    assert json.loads(bundle.json.content.decode("utf-8")) == rounds


def test_export_record_writes_both_files(tmp_path, record):
    outcome = exporter.export_record(record, tmp_path / "out")
    assert outcome.ok
    assert [p.name for p in outcome.value] == ["囚徒困境_202403050907.csv", "囚徒困境_202403050907.json"]
    assert all(p.exists() for p in outcome.value)
    assert outcome.notification.type == "success"
    assert outcome.notification.message == "导出成功"
    assert outcome.notification.duration == 3000


def test_export_failure_is_reported_once(tmp_path, record):
    broken = dataclasses.replace(record, model=None)
    outcome = exporter.export_record(broken, tmp_path)
    assert not outcome.ok
    assert outcome.value == []
    assert outcome.notification.type == "error"
    assert outcome.notification.message == "导出失败"
    assert list(tmp_path.iterdir()) == []
