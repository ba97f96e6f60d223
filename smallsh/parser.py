import os

from config import MAX_LINE

PID_TOKEN = "$$"
BACKGROUND = "&"
COMMENT = "#"

# Stands in for an empty line; never equal to a builtin or program name
BLANK = ""


class ParsedCommand:
    """One line of user input split into argv-style arguments."""

    def __init__(self, raw_line, arguments):
        self.raw_line = raw_line
        self.arguments = list(arguments) or [BLANK]

    def __repr__(self):
        return f"ParsedCommand({self.arguments!r})"

    @property
    def name(self):
        return self.arguments[0] if self.arguments else BLANK

    @property
    def args(self):
        return self.arguments[1:]

    @property
    def is_noop(self):
        """Blank lines and comments"""
        return self.name == BLANK or self.name.startswith(COMMENT)

    @property
    def background(self):
        return len(self.arguments) > 1 and self.arguments[-1] == BACKGROUND

    def argv(self):
        """Arguments without the trailing background marker"""
        if self.background:
            return self.arguments[:-1]
        return list(self.arguments)

    def release(self):
        """Drop every argument. Safe to call more than once."""
        self.arguments.clear()


def expand_pid(line, pid=None, limit=MAX_LINE):
    """
    Replace every "$$" in line with the shell's pid, left to right.
    The line is returned unchanged if the expansion would not fit in limit.
    """
    if PID_TOKEN not in line:
        return line

    if pid is None:
        pid = os.getpid()
    expanded = line.replace(PID_TOKEN, str(pid))
    if len(expanded) > limit:
        return line
    return expanded


def parse_command(line, mode=None):
    """
    Split a preprocessed line on whitespace.
    In foreground-only mode a trailing "&" is dropped.
    Returns: ParsedCommand
    """
    tokens = line.split()

    if mode is not None and mode.foreground_only:
        if tokens and tokens[-1] == BACKGROUND:
            tokens.pop()

    return ParsedCommand(line, tokens)
