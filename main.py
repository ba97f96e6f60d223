import logging
import sys

from config import LOG_LEVEL
from smallsh.shell import main_loop


def main():
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return main_loop()


if __name__ == "__main__":
    sys.exit(main())
