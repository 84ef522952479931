import logging
from datetime import date
from unittest.mock import MagicMock

import pytest

from resume_agent.log import LOG_FORMAT, _daily_file_handler
from resume_agent.retry import backoff_delays, retry


class TestBackoff:
    def test_exponential_and_capped(self):
        assert list(backoff_delays(5, 1.0, 5.0, 2.0, jitter=False)) == [1.0, 2.0, 4.0, 5.0]

    def test_single_attempt_never_waits(self):
        assert list(backoff_delays(1, 1.0, 5.0, 2.0, jitter=False)) == []

    def test_jitter_stays_within_half_to_one_and_a_half(self):
        for delay in backoff_delays(4, 2.0, 100.0, 1.0, jitter=True):
            assert 1.0 <= delay <= 3.0


class TestRetry:
    def test_recovers_after_transient_errors(self):
        fn = MagicMock(side_effect=[ConnectionError("a"), ConnectionError("b"), "ok"])
        fn.__qualname__ = "fn"
        assert retry(max_attempts=3, retryable=(ConnectionError,))(fn)() == "ok"
        assert fn.call_count == 3

    def test_reraises_last_error(self):
        fn = MagicMock(side_effect=ConnectionError("down"))
        fn.__qualname__ = "fn"
        with pytest.raises(ConnectionError, match="down"):
            retry(max_attempts=2, retryable=(ConnectionError,))(fn)()
        assert fn.call_count == 2

    def test_other_errors_not_retried(self):
        fn = MagicMock(side_effect=KeyError("x"))
        fn.__qualname__ = "fn"
        with pytest.raises(KeyError):
            retry(max_attempts=3, retryable=(ConnectionError,))(fn)()
        assert fn.call_count == 1

    def test_zero_attempts_rejected(self):
        with pytest.raises(ValueError):
            retry(max_attempts=0)


class TestLogFile:
    def test_daily_file_name(self, tmp_path):
        handler = _daily_file_handler(tmp_path / "logs", logging.Formatter(LOG_FORMAT))
        try:
            assert handler is not None
            assert handler.baseFilename.endswith(f"resume_agent_{date.today().isoformat()}.log")
            assert handler.level == logging.DEBUG
        finally:
            handler.close()

    def test_unwritable_dir_skipped(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        assert _daily_file_handler(blocker / "logs", logging.Formatter(LOG_FORMAT)) is None
