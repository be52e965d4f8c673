import logging
from pathlib import Path
from .validation import (
    current_year,
    normalize_year,
    pad_zero,
    pad_zero_period,
    resolve_range,
    to_number,
)
from .lunar_year import get_lunar_year

# Default log location
LOG_DIR = Path('logs')
LOG_FILE = LOG_DIR / 'draw_attributes.log'


def setup_logging(log_file=None, level=logging.INFO):
    """
    Set up logging configuration.
    
    Args:
        log_file: Path to log file, defaults to logs/draw_attributes.log
        level: Logging level, defaults to INFO
    """
    if log_file is None:
        LOG_DIR.mkdir(exist_ok=True)
        log_file = LOG_FILE
    else:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler()
        ]
    )
    
    logger = logging.getLogger()
    logger.setLevel(level)
    
    logging.info(f"Logging initialized at level {logging.getLevelName(level)}")
    logging.info(f"Log file: {log_file}")
    
    return logger

__all__ = ['setup_logging', 'current_year', 'normalize_year', 'pad_zero',
           'pad_zero_period', 'resolve_range', 'to_number', 'get_lunar_year',
           'LOG_DIR', 'LOG_FILE']
