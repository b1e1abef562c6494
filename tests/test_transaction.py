"""Tests for staged two-file commits."""

import json
import os
import stat
from unittest.mock import patch

import pytest

from bind_manager.core.exceptions import TransactionError
from bind_manager.repositories.transaction import StoreTransaction


@pytest.fixture
def files(tmp_path):
    first = tmp_path / "blacklisted.zones"
    second = tmp_path / "reason_log.json"
    first.write_text("old zones\n", encoding="utf-8")
    second.write_text("[]", encoding="utf-8")
    return first, second


@pytest.fixture
def marker(tmp_path):
    return tmp_path / "reason_log.json.inconsistent"


class TestStoreTransaction:
    def test_commit_writes_all(self, files, marker):
        first, second = files
        transaction = StoreTransaction(str(marker))
        transaction.stage(str(first), "new zones\n")
        transaction.stage(str(second), '[{"domain": "a.com", "reason": ""}]')

        assert transaction.commit() == [str(first), str(second)]
        assert first.read_text(encoding="utf-8") == "new zones\n"
        assert json.loads(second.read_text(encoding="utf-8"))[0]["domain"] == "a.com"
        assert not os.path.exists(str(first) + ".tmp")
        assert not os.path.exists(str(second) + ".tmp")
        assert transaction.staged == []

    def test_empty_commit(self, marker):
        assert StoreTransaction(str(marker)).commit() == []

    def test_restage_replaces_content(self, files, marker):
        first, _ = files
        transaction = StoreTransaction(str(marker))
        transaction.stage(str(first), "one\n")
        transaction.stage(str(first), "two\n")
        transaction.commit()

        assert first.read_text(encoding="utf-8") == "two\n"

    def test_staging_failure_changes_nothing(self, files, marker):
        first, second = files
        transaction = StoreTransaction(str(marker))
        transaction.stage(str(first), "new zones\n")
        transaction.stage(str(second), "[1]")

        with patch(
            "bind_manager.repositories.transaction.write_file",
            side_effect=[None, OSError("disk full")],
        ):
            with pytest.raises(OSError):
                transaction.commit()

        assert first.read_text(encoding="utf-8") == "old zones\n"
        assert second.read_text(encoding="utf-8") == "[]"
        assert not marker.exists()

    def test_partial_commit_leaves_marker(self, files, marker):
        first, second = files
        transaction = StoreTransaction(str(marker))
        transaction.stage(str(first), "new zones\n")
        transaction.stage(str(second), "[1]")

        real_replace = os.replace
        calls = []

        def flaky_replace(src, dst):
            calls.append(dst)
            if len(calls) == 2:
                raise OSError("device gone")
            return real_replace(src, dst)

        with patch("bind_manager.repositories.transaction.os.replace", side_effect=flaky_replace):
            with pytest.raises(TransactionError) as exc_info:
                transaction.commit()

        assert exc_info.value.committed == [str(first)]
        assert exc_info.value.pending == [str(second)]
        assert first.read_text(encoding="utf-8") == "new zones\n"
        assert second.read_text(encoding="utf-8") == "[]"
        assert not os.path.exists(str(second) + ".tmp")

        details = json.loads(marker.read_text(encoding="utf-8"))
        assert details["committed"] == [str(first)]
        assert details["pending"] == [str(second)]

    def test_first_replace_failure_is_plain_error(self, files, marker):
        first, second = files
        transaction = StoreTransaction(str(marker))
        transaction.stage(str(first), "new zones\n")
        transaction.stage(str(second), "[1]")

        with patch("bind_manager.repositories.transaction.os.replace", side_effect=OSError("read-only")):
            with pytest.raises(OSError) as exc_info:
                transaction.commit()

        assert not isinstance(exc_info.value, TransactionError)
        assert first.read_text(encoding="utf-8") == "old zones\n"
        assert not marker.exists()

    def test_commit_keeps_target_mode(self, files, marker, strict_umask):
        first, second = files
        first.chmod(0o640)
        second.chmod(0o644)
        transaction = StoreTransaction(str(marker))
        transaction.stage(str(first), "new zones\n")
        transaction.stage(str(second), "[1]")

        transaction.commit()

        assert stat.S_IMODE(first.stat().st_mode) == 0o640
        assert stat.S_IMODE(second.stat().st_mode) == 0o644
