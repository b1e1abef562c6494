"""Tests for the reason log store."""

import json
from unittest.mock import patch

import pytest

from bind_manager.core.types import DomainEntry, LoadStatus
from bind_manager.repositories.reason_repository import ReasonRepository


@pytest.fixture
def reasons(reason_log):
    return ReasonRepository(str(reason_log))


class TestReasonRepository:
    def test_missing_file(self, reasons):
        assert reasons.load_with_status() == ([], LoadStatus.MISSING)
        assert reasons.load() == []

    def test_round_trip_preserves_order(self, reasons):
        entries = [
            DomainEntry("zeta.org", "malware"),
            DomainEntry("alpha.net", ""),
            DomainEntry("mid.com", "tracking"),
        ]
        reasons.save(entries)

        assert reasons.load_with_status() == (entries, LoadStatus.OK)

    def test_document_layout(self, reasons, reason_log):
        reasons.save([DomainEntry("x.com", "abuse")])

        assert json.loads(reason_log.read_text(encoding="utf-8")) == [{"domain": "x.com", "reason": "abuse"}]

    def test_save_leaves_no_shadow(self, reasons, reason_log):
        reasons.save([DomainEntry("x.com", "abuse")])
        assert not (reason_log.parent / "reason_log.json.tmp").exists()

    def test_invalid_json_is_corrupt(self, reasons, reason_log):
        reason_log.write_text("{not json", encoding="utf-8")
        assert reasons.load_with_status() == ([], LoadStatus.CORRUPT)

    @pytest.mark.parametrize(
        "data",
        [
            {"domain": "x.com", "reason": "abuse"},
            [{"domain": "x.com"}],
            [{"domain": 1, "reason": "abuse"}],
            ["x.com"],
        ],
    )
    def test_unexpected_layout_is_corrupt(self, reasons, reason_log, data):
        reason_log.write_text(json.dumps(data), encoding="utf-8")
        assert reasons.load_with_status() == ([], LoadStatus.CORRUPT)

    def test_save_into_missing_directory_raises(self, tmp_path):
        reasons = ReasonRepository(str(tmp_path / "nope" / "reason_log.json"))
        with pytest.raises(OSError):
            reasons.save([DomainEntry("x.com", "abuse")])

    def test_quarantine_copies_file(self, reasons, reason_log):
        reason_log.write_text("{not json", encoding="utf-8")

        target = reasons.quarantine()

        assert target is not None
        assert target.startswith(str(reason_log) + ".corrupt-")
        with open(target, encoding="utf-8") as f:
            assert f.read() == "{not json"
        assert reason_log.exists()

    def test_quarantine_missing_file(self, reasons):
        assert reasons.quarantine() is None

    @patch("bind_manager.repositories.reason_repository.datetime")
    def test_quarantine_same_instant_keeps_both(self, mock_datetime, reasons, reason_log):
        mock_datetime.now.return_value.strftime.return_value = "20260101000000000000"

        reason_log.write_text("{first", encoding="utf-8")
        first = reasons.quarantine()
        reason_log.write_text("{second", encoding="utf-8")
        second = reasons.quarantine()

        assert first != second
        with open(first, encoding="utf-8") as f:
            assert f.read() == "{first"
        with open(second, encoding="utf-8") as f:
            assert f.read() == "{second"
