import logging
import os
import sys

import psutil

logger = logging.getLogger(__name__)


class ExitStatus:
    """How a child finished: an exit value or a terminating signal."""

    def __init__(self, code=0, signal=None):
        self.code = code
        self.signal = signal

    @classmethod
    def from_wait_status(cls, raw):
        """
        Decode a raw status as returned by os.waitpid.
        Any signal death counts as a signal, SIGHUP (1) included.
        """
        if os.WIFSIGNALED(raw):
            return cls(signal=os.WTERMSIG(raw))
        if os.WIFEXITED(raw):
            return cls(code=os.WEXITSTATUS(raw))
        return cls(code=raw)

    @property
    def signaled(self):
        return self.signal is not None

    def __eq__(self, other):
        if not isinstance(other, ExitStatus):
            return NotImplemented
        return (self.code, self.signal) == (other.code, other.signal)

    def __repr__(self):
        return f"ExitStatus(code={self.code}, signal={self.signal})"

    def __str__(self):
        if self.signaled:
            return f"terminated by signal {self.signal}"
        return f"exit value {self.code}"


class JobRegistry:
    """
    Background pids waiting to be reaped, oldest first.
    """

    def __init__(self):
        self._pids = []

    def __len__(self):
        return len(self._pids)

    def __contains__(self, pid):
        return pid in self._pids

    @property
    def pids(self):
        return list(self._pids)

    def add(self, pid):
        """Track a new background job"""
        if pid in self._pids:
            raise ValueError(f"pid {pid} is already tracked")
        self._pids.append(pid)
        logger.debug("tracking background pid %d (%d jobs)", pid, len(self._pids))

    def poll(self):
        """
        Check every tracked pid once without blocking.
        Returns: [(pid, ExitStatus)] for finished jobs, in registration order
        """
        finished, running = [], []
        for pid in self._pids:
            try:
                done, raw = os.waitpid(pid, os.WNOHANG)
            except ChildProcessError:
                logger.warning("background pid %d is no longer our child", pid)
                continue
            if done == 0:
                running.append(pid)
            else:
                finished.append((pid, ExitStatus.from_wait_status(raw)))
        self._pids = running
        return finished

    def report_finished(self):
        """Reap finished jobs and print one line for each"""
        finished = self.poll()
        for pid, status in finished:
            print(f"background pid {pid} is done: {status}")
        if finished:
            sys.stdout.flush()
        return finished

    def terminate_all(self):
        """Send SIGTERM to every tracked job. Does not wait for them."""
        for pid in self._pids:
            try:
                psutil.Process(pid).terminate()
                logger.debug("sent SIGTERM to background pid %d", pid)
            except psutil.NoSuchProcess:
                pass
            except psutil.AccessDenied as e:
                logger.warning("could not terminate background pid %d: %s", pid, e)
