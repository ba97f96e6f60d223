"""Tests for the background job registry and exit status decoding."""

import os
import signal
import time

import pytest

from smallsh.executor import run_background
from smallsh.job_control import ExitStatus, JobRegistry


def _wait_for_all(jobs, timeout=5):
    """Poll until every job is reaped; return everything reported."""
    reported = []
    deadline = time.monotonic() + timeout
    while len(jobs) and time.monotonic() < deadline:
        reported.extend(jobs.poll())
        time.sleep(0.01)
    return reported


class TestExitStatus:
    """Verify decoding and formatting of wait statuses."""

    def test_default(self):
        """The initial status reads exit value 0."""
        assert str(ExitStatus()) == "exit value 0"

    def test_exited(self):
        """An exit code is decoded from the high byte."""
        status = ExitStatus.from_wait_status(3 << 8)
        assert status == ExitStatus(3)
        assert str(status) == "exit value 3"

    def test_signaled(self):
        """A terminating signal is decoded from the low bits."""
        status = ExitStatus.from_wait_status(signal.SIGKILL)
        assert status.signaled
        assert str(status) == "terminated by signal 9"

    def test_sighup_is_a_signal(self):
        """Signal 1 is reported as a signal, not as exit value 1."""
        status = ExitStatus.from_wait_status(signal.SIGHUP)
        assert status == ExitStatus(signal=1)
        assert str(status) == "terminated by signal 1"


class TestJobRegistry:
    """Verify tracking, reaping and termination of background jobs."""

    def test_starts_empty(self):
        """A new registry tracks nothing and polls to nothing."""
        jobs = JobRegistry()
        assert len(jobs) == 0
        assert jobs.poll() == []

    def test_duplicate_pid_rejected(self):
        """The same pid cannot be tracked twice."""
        jobs = JobRegistry()
        jobs.add(12345)
        with pytest.raises(ValueError):
            jobs.add(12345)

    def test_running_job_left_alone(self, make_command):
        """A job that has not finished stays tracked."""
        jobs = JobRegistry()
        pid = run_background(make_command("sleep", "5", "&"), jobs)
        try:
            assert jobs.poll() == []
            assert pid in jobs
        finally:
            os.kill(pid, signal.SIGKILL)
            os.waitpid(pid, 0)

    def test_fifo_reporting(self, make_command):
        """Three finished jobs are reported once each, oldest first."""
        jobs = JobRegistry()
        pids = [run_background(make_command("true", "&"), jobs) for _ in range(3)]
        assert len(set(pids)) == 3
        assert jobs.pids == pids

        for pid in pids:
            os.waitid(os.P_PID, pid, os.WEXITED | os.WNOWAIT)
        reported = jobs.poll()
        assert [pid for pid, _ in reported] == pids
        assert all(status == ExitStatus(0) for _, status in reported)
        assert len(jobs) == 0
        assert jobs.poll() == []

    def test_order_kept_after_removal(self, make_command):
        """Removing a finished job keeps the others in their order."""
        jobs = JobRegistry()
        first = run_background(make_command("sleep", "5", "&"), jobs)
        middle = run_background(make_command("true", "&"), jobs)
        last = run_background(make_command("sleep", "5", "&"), jobs)
        try:
            deadline = time.monotonic() + 5
            reported = []
            while not reported and time.monotonic() < deadline:
                reported = jobs.poll()
                time.sleep(0.01)
            assert reported == [(middle, ExitStatus(0))]
            assert jobs.pids == [first, last]
        finally:
            jobs.terminate_all()
            _wait_for_all(jobs)

    def test_grows_past_thirty(self, make_command):
        """More than thirty concurrent jobs are tracked."""
        jobs = JobRegistry()
        pids = [run_background(make_command("true", "&"), jobs) for _ in range(35)]
        assert jobs.pids == pids

        for pid in pids:
            os.waitid(os.P_PID, pid, os.WEXITED | os.WNOWAIT)
        reported = jobs.poll()
        assert [pid for pid, _ in reported] == pids
        assert len(jobs) == 0

    def test_report_finished(self, make_command, capfd):
        """Finished jobs are printed with their status."""
        jobs = JobRegistry()
        pid = run_background(make_command("sh", "-c", "exit 4", "&"), jobs)
        os.waitid(os.P_PID, pid, os.WEXITED | os.WNOWAIT)
        capfd.readouterr()

        jobs.report_finished()
        assert capfd.readouterr().out == f"background pid {pid} is done: exit value 4\n"

    def test_terminate_all(self, make_command):
        """terminate_all() sends SIGTERM to every job."""
        jobs = JobRegistry()
        pids = [run_background(make_command("sleep", "30", "&"), jobs) for _ in range(2)]
        jobs.terminate_all()
        for pid in pids:
            _, raw = os.waitpid(pid, 0)
            assert ExitStatus.from_wait_status(raw) == ExitStatus(signal=signal.SIGTERM)

    def test_foreign_pid_dropped(self):
        """A pid that is not our child is dropped without a report."""
        jobs = JobRegistry()
        jobs.add(os.getppid())
        assert jobs.poll() == []
        assert len(jobs) == 0
