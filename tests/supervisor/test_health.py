import os
from unittest.mock import Mock, patch

import pytest
import requests

from src.supervisor.health import http_ok, wait_ready


class TestHttpOk:
    @pytest.mark.parametrize(("status", "expected"), [(200, True), (302, True), (404, False), (503, False)])
    def test_status_ranges(self, status, expected):
        with patch("src.supervisor.health.requests.get") as get:
            get.return_value = Mock(status_code=status)
            assert http_ok("http://127.0.0.1:3000/health") is expected

    def test_non_http_url(self):
        with patch("src.supervisor.health.requests.get") as get:
            assert http_ok("tcp://127.0.0.1:3000") is False
        get.assert_not_called()

    def test_connection_error(self):
        with patch(
            "src.supervisor.health.requests.get",
            side_effect=requests.ConnectionError("refused"),
        ):
            assert http_ok("http://127.0.0.1:3000/") is False


class TestWaitReady:
    def test_retries_until_ready(self):
        with patch("src.supervisor.health.http_ok", side_effect=[False, False, True]) as ok, \
                patch("src.supervisor.health.time.sleep") as sleep:
            assert wait_ready("http://x/", attempts=5, interval=0.5) is True
        assert ok.call_count == 3
        assert sleep.call_count == 2

    def test_gives_up_after_attempts(self):
        with patch("src.supervisor.health.http_ok", return_value=False) as ok, \
                patch("src.supervisor.health.time.sleep"):
            assert wait_ready("http://x/", attempts=3) is False
        assert ok.call_count == 3

    def test_stops_when_process_dies(self):
        with patch("src.supervisor.health.http_ok", return_value=False) as ok, \
                patch("src.supervisor.health.is_alive", return_value=False), \
                patch("src.supervisor.health.time.sleep"):
            assert wait_ready("http://x/", pid=os.getpid(), attempts=10) is False
        assert ok.call_count == 1
