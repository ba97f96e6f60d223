import signal

import pytest

from smallsh.parser import ParsedCommand


@pytest.fixture
def restore_signals():
    """Put back the signal handlers a test installs"""
    signals = (signal.SIGINT, signal.SIGTSTP, signal.SIGPIPE, signal.SIGXFSZ)
    saved = {sig: signal.getsignal(sig) for sig in signals}
    yield
    for sig, handler in saved.items():
        signal.signal(sig, handler)


@pytest.fixture
def make_command():
    """Build a ParsedCommand straight from argument strings"""

    def _make(*arguments):
        return ParsedCommand(" ".join(arguments), arguments)

    return _make
