import logging
import threading
import traceback
from typing import Optional

from creator_leads.config import settings

_log_lock = threading.Lock()
_log_was_setup = False
_log_setup_location = ""


def setup_logger(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """ Configures the root logger for the application. Can only be called once,
    additional calls will be ignored with a warning.

    :param level: Minimum severity for the console log (default - settings.LOG_LEVEL)
    :param log_format: Format string for the console handler (default - settings.LOG_FORMAT)
    """
    global _log_was_setup
    global _log_setup_location

    with _log_lock:
        if _log_was_setup:
            logging.root.warning(f"Logger was already set up, ignoring additional setup! "
                                 f"Previously initialized here: {_log_setup_location}")
            return

        level = level or settings.LOG_LEVEL
        human_formatter = logging.Formatter(log_format or settings.LOG_FORMAT)

        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(human_formatter)

        logging.root.setLevel(level)
        logging.root.addHandler(stream_handler)

        _log_setup_location = "".join(traceback.format_stack(limit=5))
        _log_was_setup = True


def get_logger(logger_name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(logger_name or "creator_leads")
