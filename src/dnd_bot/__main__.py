"""Run the console bot with ``python -m dnd_bot``."""

import sys

from dnd_bot.app import main


if __name__ == "__main__":
    sys.exit(main())
