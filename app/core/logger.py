import logging
import os

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

def get_module_logger(module_name: str, log_file: str):
    """Logger writing to its own file under LOG_DIR and to stderr"""
    logger = logging.getLogger(module_name)
    logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

    # Prevent adding multiple handlers if logger is called multiple times
    if not logger.handlers:
        log_dir = os.getenv("LOG_DIR", "logs")
        log_path = os.path.join(log_dir, os.path.basename(log_file))
        os.makedirs(log_dir, exist_ok=True)

        formatter = logging.Formatter(LOG_FORMAT)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
    return logger

def mask_secret(value, visible: int = 10) -> str:
    """Show only the first few characters of a token or secret"""
    if not value:
        return "NOT SET"
    return f"{value[:visible]}..."
