import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name="retail_dashboard", level=logging.INFO, file_path=None):
    """
    Configure (once) and return the application logger.
    Module loggers (logging.getLogger(__name__)) propagate into it.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level)
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)
        if file_path:
            fh = logging.FileHandler(str(file_path), mode="a", encoding="utf-8", delay=True)
            fh.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(fh)
    return logger
