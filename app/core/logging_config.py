import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

def configure_logging(level: str = "INFO", log_file: Optional[str] = "app.log"):
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
