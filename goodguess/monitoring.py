"""
Monitoring module for GoodGuess.
Handles logging configuration shared by the game modules.
"""

import os
import logging
from pathlib import Path

_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _env_flag(name: str, default: str) -> bool:
    return str(os.getenv(name, default)).strip().lower() in ('1', 'true', 'yes', 'on')


def configure_logging(level_name: str = None, log_dir: str = None, to_file: bool = None) -> logging.Logger:
    """
    Configure the root logger for the game.

    Args:
        level_name: Log level name; defaults to the LOG_LEVEL env var (INFO)
        log_dir: Directory for game.log; defaults to LOG_DIR env var (logs/)
        to_file: Whether to also write game.log; defaults to LOG_TO_FILE env var

    Returns:
        The package logger
    """
    level_name = (level_name or os.getenv('LOG_LEVEL', 'INFO')).strip().upper()
    level = getattr(logging, level_name, logging.INFO)
    if to_file is None:
        to_file = _env_flag('LOG_TO_FILE', 'false')

    handlers = [logging.StreamHandler()]
    if to_file:
        logs_dir = Path(log_dir or os.getenv('LOG_DIR', 'logs'))
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(logs_dir / 'game.log', encoding='utf-8'))
        except OSError as e:
            # Read-only filesystems still get console logging
            logging.getLogger(__name__).warning(f"File logging disabled: {e}")

    logging.basicConfig(level=level, format=_LOG_FORMAT, handlers=handlers, force=True)

    # Also explicitly set module logger levels
    logging.getLogger('goodguess').setLevel(level)
    logging.getLogger('goodguess.game_logic').setLevel(level)
    logging.getLogger('goodguess.remote_scorer').setLevel(level)
    return logging.getLogger('goodguess')


# Configure once on first import
logger = configure_logging()
