import os
import signal

ENTER_MESSAGE = b"\nEntering foreground-only mode (& is now ignored)\n"
EXIT_MESSAGE = b"\nExiting foreground-only mode\n"


class ForegroundMode:
    """
    Foreground-only mode toggled by SIGTSTP.
    Only the signal handler writes `count`; everything else reads it.
    """

    def __init__(self):
        self.count = 0

    @property
    def foreground_only(self):
        return self.count % 2 == 1

    def toggle(self):
        """Record one SIGTSTP delivery and announce the new mode"""
        self.count += 1
        # fixed unbuffered writes only
        if self.foreground_only:
            os.write(1, ENTER_MESSAGE)
        else:
            os.write(1, EXIT_MESSAGE)

    def handle_sigtstp(self, signum, frame):
        self.toggle()


def init_signal_handlers(mode):
    """
    Dispositions for the interactive shell itself:
    SIGINT is ignored, SIGTSTP toggles foreground-only mode.
    """
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    signal.signal(signal.SIGTSTP, mode.handle_sigtstp)


def restore_default_signals():
    """Undo the SIGPIPE/SIGXFSZ ignores Python sets up, before exec"""
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)
    signal.signal(signal.SIGXFSZ, signal.SIG_DFL)


def foreground_child_signals():
    """Ctrl+C kills a foreground job, Ctrl+Z does nothing to it"""
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    signal.signal(signal.SIGTSTP, signal.SIG_IGN)
    restore_default_signals()


def background_child_signals():
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    signal.signal(signal.SIGTSTP, signal.SIG_IGN)
    restore_default_signals()
