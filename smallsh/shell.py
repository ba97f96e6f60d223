import logging
import sys

from config import MAX_LINE, PROMPT
from smallsh.builtin import CD, EXIT, STATUS, builtin_cd, builtin_status
from smallsh.executor import run_background, run_foreground
from smallsh.history import init_readline, load_history, save_history
from smallsh.job_control import ExitStatus, JobRegistry
from smallsh.parser import expand_pid, parse_command
from smallsh.signals import ForegroundMode, init_signal_handlers

logger = logging.getLogger(__name__)


class Shell:
    """
    The read-eval loop: builtins run inline, anything else is forked.
    """

    def __init__(self, mode=None, jobs=None):
        self.mode = mode if mode is not None else ForegroundMode()
        self.jobs = jobs if jobs is not None else JobRegistry()
        self.last_status = ExitStatus()
        self.last_was_builtin = False

    def read_line(self):
        """
        Read one line (at most MAX_LINE characters).
        Returns: the line, or None at end of input
        """
        try:
            line = input(PROMPT)
        except EOFError:
            return None
        return line[:MAX_LINE]

    def execute(self, command):
        """
        Dispatch one parsed command.
        Returns: False once the shell should exit
        """
        if command.is_noop:
            return True

        name = command.name
        if name == EXIT:
            return False
        if name == CD:
            builtin_cd(command.args)
            self.last_was_builtin = True
        elif name == STATUS:
            builtin_status(self.last_status, self.last_was_builtin)
            self.last_was_builtin = True
        elif command.background:
            run_background(command, self.jobs)
            self.last_status = ExitStatus()
            self.last_was_builtin = False
        else:
            self.last_status = run_foreground(command)
            self.last_was_builtin = False
        return True

    def run_line(self, line):
        """Preprocess, parse and execute one line of input"""
        command = parse_command(expand_pid(line), self.mode)
        try:
            return self.execute(command)
        finally:
            command.release()

    def shutdown(self):
        logger.debug("exiting with %d background jobs", len(self.jobs))
        self.jobs.terminate_all()

    def loop(self):
        # jobs are terminated on every way out, a failed fork included
        try:
            while True:
                init_signal_handlers(self.mode)
                self.jobs.report_finished()

                line = self.read_line()
                if line is None:
                    print()
                    break
                if not self.run_line(line):
                    break
                sys.stdout.flush()
        finally:
            self.shutdown()


def main_loop():
    """Run an interactive session until exit or end of input"""
    interactive = init_readline()
    if interactive:
        load_history()

    shell = Shell()
    try:
        shell.loop()
    finally:
        if interactive:
            save_history()
    return 0
