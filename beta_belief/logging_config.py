import logging
import logging.handlers
import os
from datetime import datetime
from typing import Optional

# Constants
MAX_LOG_FILE_SIZE: int = 10 * 1024 * 1024  # 10 MB
MAX_LOG_BACKUP_COUNT: int = 9  # 10 files total


def setup_logging(
    log_dir: Optional[str] = None,
    verbose: bool = False,
    console_handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    if log_dir is None:
        log_dir = os.path.join(os.getcwd(), "logs")
    os.makedirs(log_dir, exist_ok=True)

    current_time = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"beta_belief_{current_time}.log")

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # File Handler
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=MAX_LOG_FILE_SIZE, backupCount=MAX_LOG_BACKUP_COUNT
    )
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file_handler.setFormatter(file_formatter)

    # Console Handler
    if console_handler is None:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger
