import os

from smallsh.parser import BACKGROUND

EXIT = "exit"
CD = "cd"
STATUS = "status"

BUILTINS = (EXIT, CD, STATUS)


def is_builtin(name):
    return name in BUILTINS


def file_directory_error(name):
    print(f"smallsh: {name}: No such file or directory")


def builtin_cd(args):
    """
    Change directory; with no argument go to $HOME.
    A trailing "&" is not an argument: cd always runs in the shell.
    """
    if args and args[0] != BACKGROUND:
        path = args[0]
    else:
        path = os.getenv("HOME")

    if not path:
        file_directory_error("HOME")
        return 1
    try:
        os.chdir(path)
        return 0
    except OSError:
        file_directory_error(path)
        return 1


def builtin_status(last_status, last_was_builtin=False):
    """
    Print how the last external command finished.
    Prints nothing if the previous command was itself a builtin.
    """
    if not last_was_builtin:
        print(last_status)
    return 0
