import logging
from typing import Union

from bytedance_ai_lib.constants import DEFAULT_LOG_LEVEL


def prepare_logger(
    logger_name: str, level: Union[str, int] = DEFAULT_LOG_LEVEL
) -> logging.Logger:
    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
