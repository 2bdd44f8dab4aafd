import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name, log_dir=None, log_filename="eventlog.log", level=logging.WARNING, console=True):
    """
    Set up and return a logger with an optional file handler and a console handler.

    Args:
        name (str): The logger name.
        log_dir (str): Directory where the log file will be stored. No file
            handler is added when empty.
        log_filename (str): Log file name.
        level (int or str): Logging level.
        console (bool): Whether to add a console (stderr) handler.

    Returns:
        logging.Logger: The configured logger.
    """
    requested = level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    # Unknown names come back as "Level <name>" strings.
    unknown_level = not isinstance(level, int)
    if unknown_level:
        level = logging.WARNING

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear out any existing handlers.
    logger.handlers = []

    formatter = logging.Formatter(LOG_FORMAT)

    if log_dir:
        log_dir = os.path.expanduser(log_dir)
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(os.path.join(log_dir, log_filename))
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if unknown_level:
        logger.warning("Unknown logging level %r, using WARNING.", requested)

    return logger
