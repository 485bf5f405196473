import logging
import threading
import time

import pytest

from sopot.watchdog import WatchDogTimer


def _wait_for(predicate, limit=2.0):
    deadline = time.monotonic() + limit
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_start_and_stop_toggle_running():
    timer = WatchDogTimer(10000, on_timeout=lambda: None, check_interval=0.01)
    assert timer.running is False
    timer.start()
    assert timer.running is True
    timer.stop()
    assert timer.running is False


def test_timeout_calls_handler():
    fired = threading.Event()
    timer = WatchDogTimer(20, on_timeout=fired.set, check_interval=0.01)
    timer.start()
    try:
        assert fired.wait(2.0) is True
    finally:
        timer.stop()


def test_restart_prevents_timeout():
    calls = []
    timer = WatchDogTimer(500, on_timeout=lambda: calls.append(1), check_interval=0.01)
    timer.start()
    try:
        end = time.monotonic() + 0.3
        while time.monotonic() < end:
            timer.restart()
            time.sleep(0.01)
    finally:
        timer.stop()
    assert calls == []


def test_handler_repeats_while_expired():
    calls = []
    timer = WatchDogTimer(0, on_timeout=lambda: calls.append(1), check_interval=0.01)
    timer.start()
    try:
        _wait_for(lambda: len(calls) >= 3)
    finally:
        timer.stop()
    assert len(calls) >= 3


def test_default_handler_logs(caplog):
    caplog.set_level(logging.INFO, logger="sopot.watchdog")
    timer = WatchDogTimer(0, check_interval=0.01)
    timer.start()
    try:
        _wait_for(lambda: "Process is not responding" in caplog.text)
    finally:
        timer.stop()
    assert "Process is not responding" in caplog.text


def test_start_twice_logs_error(caplog):
    timer = WatchDogTimer(10000, on_timeout=lambda: None, check_interval=0.01)
    timer.start()
    try:
        with caplog.at_level(logging.ERROR, logger="sopot.watchdog"):
            timer.start()
        assert "Trying to start a running watch-dog timer" in caplog.text
        assert timer.running is True
    finally:
        timer.stop()


def test_stop_when_not_running_logs_error(caplog):
    timer = WatchDogTimer(10000, on_timeout=lambda: None)
    with caplog.at_level(logging.ERROR, logger="sopot.watchdog"):
        timer.stop()
    assert "Trying to stop a watch-dog timer that is not running" in caplog.text
    assert timer.running is False


def test_paused_stops_and_resumes():
    timer = WatchDogTimer(10000, on_timeout=lambda: None, check_interval=0.01)
    timer.start()
    try:
        with timer.paused():
            assert timer.running is False
        assert timer.running is True
    finally:
        timer.stop()


def test_paused_leaves_stopped_timer_stopped():
    timer = WatchDogTimer(10000, on_timeout=lambda: None)
    with timer.paused():
        assert timer.running is False
    assert timer.running is False


def test_context_manager_starts_and_stops():
    timer = WatchDogTimer(10000, on_timeout=lambda: None, check_interval=0.01)
    with timer as entered:
        assert entered is timer
        assert timer.running is True
    assert timer.running is False


def test_invalid_arguments():
    with pytest.raises(ValueError):
        WatchDogTimer(-1)
    with pytest.raises(ValueError):
        WatchDogTimer(100, check_interval=0)