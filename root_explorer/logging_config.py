import logging
import sys
from logging.handlers import RotatingFileHandler

from .config import Settings

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_configured = False


def setup_logging(settings: Settings):
    global _configured
    if _configured:
        return
    _configured = True

    # Configure root logger
    logger = logging.getLogger()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    # Console Handler (stdout)
    c_handler = logging.StreamHandler(sys.stdout)
    c_handler.setLevel(level)
    c_handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(c_handler)
    handlers = [c_handler]

    # File Handler (Rotating)
    if settings.log_file:
        # Max 2MB per file, keep only 1 backup (total ~4MB)
        f_handler = RotatingFileHandler(settings.log_file, maxBytes=2*1024*1024, backupCount=1, encoding='utf-8')
        f_handler.setLevel(level)
        f_handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(f_handler)
        handlers.append(f_handler)

    # Uvicorn Access Logs (capture them too)
    logging.getLogger("uvicorn.access").handlers = list(handlers)
    logging.getLogger("uvicorn.error").handlers = list(handlers)

    if settings.log_file:
        logging.info(f"Logging configured. Writing to {settings.log_file}")
    else:
        logging.info("Logging configured. Console only")
