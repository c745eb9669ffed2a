"""Tests for the COMMIT_MSG_VERBOSE check."""

import pytest

from commit_msg.utils.debug import is_verbose_mode


class TestIsVerboseMode:
    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "Yes"])
    def test_truthy_values(self, value):
        assert is_verbose_mode({"COMMIT_MSG_VERBOSE": value}) is True

    @pytest.mark.parametrize("value", ["", "0", "false", "no", "on"])
    def test_other_values(self, value):
        assert is_verbose_mode({"COMMIT_MSG_VERBOSE": value}) is False

    def test_unset(self):
        assert is_verbose_mode({}) is False

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("COMMIT_MSG_VERBOSE", "1")
        assert is_verbose_mode() is True

        monkeypatch.delenv("COMMIT_MSG_VERBOSE")
        assert is_verbose_mode() is False
