import logging
import sys
from datetime import datetime


class ConsoleFormatter(logging.Formatter):
    COLORS = {
        'DEBUG': '\033[36m',    # cyan
        'INFO': '\033[32m',     # green
        'WARNING': '\033[33m',  # yellow
        'ERROR': '\033[31m',    # red
        'CRITICAL': '\033[35m', # magenta
    }
    RESET = '\033[0m'

    def __init__(self, color: bool = True):
        super().__init__()
        self.color = color

    def format(self, record):
        timestamp = datetime.now().strftime("%H:%M:%S")
        msg = record.getMessage()
        if not self.color:
            return f"{timestamp} [{record.levelname}] {msg}"

        color = self.COLORS.get(record.levelname, '')
        return f"{timestamp} {color}[{record.levelname}]{self.RESET} {msg}"


def setup_logging(debug: bool = False, stream=None) -> logging.Logger:
    stream = stream or sys.stderr
    logger = logging.getLogger("joplin_publisher")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream)
    console_handler.setFormatter(ConsoleFormatter(color=stream.isatty()))
    logger.addHandler(console_handler)

    return logger
