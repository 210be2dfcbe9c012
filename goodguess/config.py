import os
import logging
from pathlib import Path
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

# Scoring configuration
DEFAULT_LENGTH_PENALTY_CAP = 25
DEFAULT_MAX_WORD_LENGTH = 30

# Session configuration
DEFAULT_HINT_CADENCE = 15  # A hint every 15 guesses
DEFAULT_HINT_ATTEMPTS = 10
DEFAULT_SPEEDRUN_TIME_LIMIT = 60  # seconds

# Remote scorer configuration
OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_OPENROUTER_MODEL = "mistralai/mistral-small-24b-instruct-2501:free"

DEFAULT_LEADERBOARD_FILE = "game_data/leaderboard.json"


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        logger.warning(f"Invalid integer for {name}; using default {default}")
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        logger.warning(f"Invalid number for {name}; using default {default}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


class Settings:
    """Game settings read from the environment (and .env)."""

    def __init__(self, **overrides):
        self.length_penalty_cap = _env_int("LENGTH_PENALTY_CAP", DEFAULT_LENGTH_PENALTY_CAP)
        self.max_word_length = _env_int("MAX_WORD_LENGTH", DEFAULT_MAX_WORD_LENGTH)
        self.hint_cadence = _env_int("HINT_CADENCE", DEFAULT_HINT_CADENCE)
        self.hint_attempts = _env_int("HINT_ATTEMPTS", DEFAULT_HINT_ATTEMPTS)
        self.speedrun_time_limit = _env_int("SPEEDRUN_TIME_LIMIT", DEFAULT_SPEEDRUN_TIME_LIMIT)

        self.use_remote_scorer = _env_bool("USE_REMOTE_SCORER", False)
        self.openrouter_api_key = os.getenv("OPENROUTER_API_KEY")
        self.openrouter_model = os.getenv("OPENROUTER_MODEL_PRIMARY", DEFAULT_OPENROUTER_MODEL)
        self.openrouter_url = os.getenv("OPENROUTER_URL", OPENROUTER_URL)
        self.remote_timeout_s = _env_float("REMOTE_SCORER_TIMEOUT_S", 3.0)
        self.remote_max_attempts = _env_int("REMOTE_SCORER_MAX_ATTEMPTS", 2)

        self.leaderboard_file = os.getenv("LEADERBOARD_FILE", DEFAULT_LEADERBOARD_FILE)

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

        if self.hint_cadence < 1:
            logger.warning(f"HINT_CADENCE must be positive; using {DEFAULT_HINT_CADENCE}")
            self.hint_cadence = DEFAULT_HINT_CADENCE

    def __repr__(self) -> str:
        key = self.openrouter_api_key
        masked = f"{key[:8]}...{'*' * (len(key) - 8)}" if key else None
        return (
            f"Settings(length_penalty_cap={self.length_penalty_cap}, hint_cadence={self.hint_cadence}, "
            f"speedrun_time_limit={self.speedrun_time_limit}, use_remote_scorer={self.use_remote_scorer}, "
            f"openrouter_api_key={masked!r})"
        )


def get_settings(**overrides) -> Settings:
    """Build settings from the current environment."""
    return Settings(**overrides)
