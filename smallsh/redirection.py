import os

from config import DEV_NULL, NEW_FILE_MODE

REDIRECT_IN = "<"
REDIRECT_OUT = ">"
OPERATORS = (REDIRECT_IN, REDIRECT_OUT)


class RedirectionError(Exception):
    """A redirection target could not be bound in the child."""


class RedirectionSpec:
    """
    Redirections of one command, in the order they were written.
    For each stream the last operator wins.
    """

    def __init__(self, operations=None):
        self.operations = list(operations or [])

    def __eq__(self, other):
        return isinstance(other, RedirectionSpec) and self.operations == other.operations

    def __repr__(self):
        return f"RedirectionSpec({self.operations!r})"

    def __bool__(self):
        return bool(self.operations)

    def _last(self, operator):
        paths = [path for op, path in self.operations if op == operator]
        return paths[-1] if paths else None

    @property
    def stdin(self):
        return self._last(REDIRECT_IN)

    @property
    def stdout(self):
        return self._last(REDIRECT_OUT)


def split_redirections(args):
    """
    Strip redirections from an argument list.
    Everything from the first operator onward is removed from argv
    (the command name at index 0 is never treated as an operator).
    Returns: (argv, RedirectionSpec)
    """
    first = next((i for i, tok in enumerate(args) if i > 0 and tok in OPERATORS), None)
    if first is None:
        return list(args), RedirectionSpec()

    operations = []
    for i in range(first, len(args)):
        if args[i] in OPERATORS:
            path = args[i + 1] if i + 1 < len(args) else None
            operations.append((args[i], path))

    return list(args[:first]), RedirectionSpec(operations)


def _bind(path, flags, target):
    try:
        fd = os.open(path, flags, NEW_FILE_MODE)
    except OSError:
        raise RedirectionError(f"smallsh: {path}: No such file or directory")
    try:
        os.dup2(fd, target)
    except OSError as e:
        raise RedirectionError(f"smallsh: {path}: {e.strerror}")
    finally:
        os.close(fd)


def apply_redirections(spec, background=False):
    """
    Bind redirection targets onto fds 0 and 1. Only ever called in a child.
    Background jobs get /dev/null for any stream left unset.
    """
    for op, path in spec.operations:
        if path is None:
            raise RedirectionError("smallsh: syntax error near unexpected token 'newline'")
        if op == REDIRECT_OUT:
            _bind(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 1)
        else:
            _bind(path, os.O_RDONLY, 0)

    if background:
        if spec.stdin is None:
            _bind(DEV_NULL, os.O_RDONLY, 0)
        if spec.stdout is None:
            _bind(DEV_NULL, os.O_WRONLY, 1)
