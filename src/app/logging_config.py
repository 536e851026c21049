"""
Logging Configuration
Sets up console (and optional file) logging for the engine packages.
"""
import logging
import sys
from typing import Optional, Sequence

PACKAGES = ('anthropometry', 'morphing', 'fit_model', 'app')


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None,
                  packages: Sequence[str] = PACKAGES) -> None:
    """
    Configures the loggers of the engine packages.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        packages: Logger namespaces to configure.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for name in packages:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Streamlit re-runs the script on every interaction
        for old in list(logger.handlers):
            old.close()
            logger.removeHandler(old)
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger('app').info("Logging initialized.")
