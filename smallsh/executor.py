import logging
import os
import sys

from smallsh.job_control import ExitStatus
from smallsh.redirection import RedirectionError, apply_redirections, split_redirections
from smallsh.signals import background_child_signals, foreground_child_signals

logger = logging.getLogger(__name__)


def _exec_child(command, background):
    """
    Runs in the forked child: redirect, set signals, exec.
    Only returns if something went wrong.
    """
    argv, redirections = split_redirections(command.argv())
    try:
        apply_redirections(redirections, background)

        if background:
            background_child_signals()
        else:
            foreground_child_signals()

        os.execvp(argv[0], argv)
    except RedirectionError as e:
        print(e)
    except OSError:
        print(f"smallsh: {argv[0]}: command not found")

    sys.stdout.flush()
    # exec never returned, so the child owns the arguments now
    command.release()


def spawn(command, background=False):
    """
    Fork a child for command.
    A failed fork ends the shell.
    Returns: pid of the child (in the parent only)
    """
    sys.stdout.flush()
    sys.stderr.flush()

    try:
        pid = os.fork()
    except OSError as e:
        print(f"smallsh: fork failed: {e.strerror}")
        sys.exit(1)

    if pid == 0:
        try:
            _exec_child(command, background)
        finally:
            os._exit(1)

    logger.debug("forked pid %d for %r (background=%s)", pid, command.name, background)
    return pid


def run_foreground(command):
    """
    Run command and wait for it.
    Returns: ExitStatus
    """
    pid = spawn(command, background=False)
    _, raw = os.waitpid(pid, 0)
    status = ExitStatus.from_wait_status(raw)

    if status.signaled:
        print(status)
    sys.stdout.flush()
    return status


def run_background(command, jobs):
    """
    Start command without waiting; the job is reaped later through jobs.
    Returns: pid
    """
    pid = spawn(command, background=True)
    jobs.add(pid)
    print(f"background process pid is {pid}")
    sys.stdout.flush()
    return pid
