import os

PROMPT = ": "

# Input limits
MAX_LINE = 2048

DEV_NULL = os.devnull
NEW_FILE_MODE = 0o644

# History ("" disables the history file)
HISTORY_FILE = os.getenv("SMALLSH_HISTORY", os.path.expanduser("~/.smallsh_history"))
MAX_HISTORY = int(os.getenv("SMALLSH_HISTSIZE", "1000"))

LOG_LEVEL = os.getenv("SMALLSH_LOG_LEVEL", "WARNING").upper()
