import logging
import os
import readline
import sys

from config import HISTORY_FILE, MAX_HISTORY

logger = logging.getLogger(__name__)


def init_readline():
    """Line editing for interactive sessions only"""
    if not sys.stdin.isatty():
        logger.debug("stdin is not a terminal, skipping readline setup")
        return False

    try:
        readline.parse_and_bind("set editing-mode emacs")
        readline.parse_and_bind("\\e[A: previous-history")
        readline.parse_and_bind("\\e[B: next-history")
    except Exception as e:
        print(f"Warning: Could not configure readline: {e}", file=sys.stderr)
        return False
    return True


def load_history():
    if not HISTORY_FILE or not os.path.exists(HISTORY_FILE):
        return
    try:
        readline.read_history_file(HISTORY_FILE)
        readline.set_history_length(MAX_HISTORY)
    except OSError as e:
        print(f"Warning: Could not load history: {e}", file=sys.stderr)


def save_history():
    if not HISTORY_FILE:
        return
    try:
        readline.set_history_length(MAX_HISTORY)
        readline.write_history_file(HISTORY_FILE)
    except OSError as e:
        print(f"Warning: Could not save history: {e}", file=sys.stderr)
