"""
Tests for event log helpers
"""
from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from src.shared.event_log import log_utils
from src.shared.event_log.database import EventLog
from src.shared.event_log.log_utils import (
    EVENT_NAMES,
    append_event,
    normalize_event_data,
    normalize_event_name,
    parse_timestamp,
    record_event,
)


class TestParseTimestamp:

    @pytest.mark.parametrize("raw,expected", [
        ("2026-05-01T10:15:30Z", datetime(2026, 5, 1, 10, 15, 30)),
        ("2026-05-01T12:15:30+02:00", datetime(2026, 5, 1, 10, 15, 30)),
        ("2026-05-01T10:15:30.123456", datetime(2026, 5, 1, 10, 15, 30, 123456)),
    ])
    def test_iso_instants_become_naive_utc(self, raw, expected):
        assert parse_timestamp(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "soon", 1714558530, {"ts": 1}])
    def test_unparseable_values(self, raw):
        assert parse_timestamp(raw) is None


class TestNormalizeEvent:

    def test_known_names_pass_through(self):
        for name in EVENT_NAMES:
            assert normalize_event_name(name) == name

    def test_unknown_names_are_kept(self):
        assert normalize_event_name(" theme_toggle ") == "theme_toggle"

    @pytest.mark.parametrize("value", [None, "", 7, ["page_view"]])
    def test_missing_name(self, value):
        assert normalize_event_name(value) == "unknown"

    def test_long_names_are_truncated(self):
        assert len(normalize_event_name("x" * 500)) == log_utils.MAX_EVENT_NAME_LENGTH

    def test_data_shapes(self):
        assert normalize_event_data(None) == {}
        assert normalize_event_data({"a": 1}) == {"a": 1}
        assert normalize_event_data([1, 2]) == {"value": [1, 2]}
        assert normalize_event_data({"a": 1}, extra={"a": 2, "b": 3}) == {"a": 1, "b": 3}


class TestRecordEvent:

    def test_append_event_stores_entry(self, db_session):
        entry = append_event(db_session, "page_view", session_id="s1", data={"path": "/"}, ip_address="127.0.0.1")

        stored = db_session.query(EventLog).filter(EventLog.id == entry.id).one()
        assert stored.event == "page_view"
        assert stored.session_id == "s1"
        assert stored.data == {"path": "/"}
        assert stored.timestamp is not None
        assert stored.created_at is not None

    def test_record_event_swallows_storage_errors(self, db_session, monkeypatch, caplog):
        def broken_commit():
            raise OperationalError("INSERT", {}, Exception("read-only database"))

        monkeypatch.setattr(db_session, "commit", broken_commit)

        assert record_event(db_session, "page_view") is None
        assert "read-only database" in caplog.text
