import time
import random
import threading
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple

from .categories import get_category, get_word_list, pick_target_word
from .config import Settings, get_settings
from .errors import DuplicateGuessError, GameError, InvalidInputError, SessionTerminalError
from .hints import generate_hint
from .monitoring import logger
from .proximity import Scorer, make_scorer
from .word_validation import is_acceptable_guess, normalize_word

CLASSIC = "classic"
SPEEDRUN = "speedrun"
MODES = (CLASSIC, SPEEDRUN)


class SessionState(Enum):
    ACTIVE_CLASSIC = "active_classic"
    ACTIVE_SPEEDRUN = "active_speedrun"
    WON = "won"
    TIMED_OUT = "timed_out"
    RESIGNED = "resigned"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.WON, SessionState.TIMED_OUT, SessionState.RESIGNED)


class GuessRecord(NamedTuple):
    word: str
    proximity: int


class GameSession:
    """
    One player's game in a category.

    Classic sessions end on the first 100-proximity guess. Speedrun sessions
    move on to a new target after each correct guess and end when the
    countdown driven by tick() reaches zero.
    """

    def __init__(self, category_id: str, mode: str = CLASSIC, scorer: Optional[Scorer] = None,
                 settings: Optional[Settings] = None, rng: Optional[random.Random] = None,
                 target_word: Optional[str] = None):
        category = get_category(category_id)
        mode = str(mode).strip().lower()
        if mode not in MODES:
            raise ValueError(f"Unknown game mode: {mode!r} (expected one of {', '.join(MODES)})")

        self.settings = settings or get_settings()
        self.scorer = scorer or make_scorer(self.settings)
        self.rng = rng or random.Random()

        self.category_id = category.id
        self.mode = mode
        self.target_word = normalize_word(target_word) if target_word else pick_target_word(
            self.category_id, rng=self.rng)
        self.guesses: List[GuessRecord] = []
        self.is_game_over = False
        self.is_won = False
        self.has_resigned = False
        self.start_time = time.time()
        self.end_time: Optional[float] = None
        self.time_limit_seconds = self.settings.speedrun_time_limit if mode == SPEEDRUN else None
        self.time_remaining = self.time_limit_seconds
        self.words_guessed_count = 0
        self.hints_enabled = False
        self.revealed_hints: List[str] = []
        self.current_hint: Optional[str] = None

        # Every word guessed this round, across speedrun targets
        self._round_words = set()
        self._lock = threading.Lock()
        self._in_flight = False

        logger.info(f"[GAME] New {self.mode} session in '{self.category_id}' using the {self.scorer.name} scorer")

    @property
    def state(self) -> SessionState:
        if self.has_resigned:
            return SessionState.RESIGNED
        if self.is_won:
            return SessionState.WON
        if self.is_game_over:
            return SessionState.TIMED_OUT
        return SessionState.ACTIVE_SPEEDRUN if self.mode == SPEEDRUN else SessionState.ACTIVE_CLASSIC

    def check_guess(self, raw_guess) -> str:
        """Return the normalized guess, or raise the GameError explaining why it is rejected."""
        if self.is_game_over:
            raise SessionTerminalError()
        guess = normalize_word(raw_guess)
        if not is_acceptable_guess(guess, self.settings.max_word_length):
            raise InvalidInputError()
        if any(record.word == guess for record in self.guesses):
            raise DuplicateGuessError()
        return guess

    def submit_guess(self, raw_guess) -> Tuple[bool, str, int]:
        """
        Score a guess against the target.

        Returns (accepted, message, proximity). Rejected guesses leave the
        session untouched and report why in the message. A call made while
        another guess is still being scored is ignored.
        """
        with self._lock:
            if self._in_flight:
                logger.debug("[GUESS] Ignoring guess submitted while another is being scored")
                return False, "Still checking your last guess...", 0
            self._in_flight = True
        try:
            return self._submit(raw_guess)
        finally:
            with self._lock:
                self._in_flight = False

    def _submit(self, raw_guess) -> Tuple[bool, str, int]:
        try:
            guess = self.check_guess(raw_guess)
        except GameError as e:
            logger.info(f"[GUESS] Rejected {raw_guess!r}: {e.message}")
            return False, e.message, 0

        proximity = self.scorer.score(guess, self.target_word, self.category_id)
        # The countdown may have run out while a remote score was pending
        if self.is_game_over:
            return False, SessionTerminalError.default_message, 0

        self.guesses.insert(0, GuessRecord(guess, proximity))
        self.guesses.sort(key=lambda record: record.proximity, reverse=True)
        self._round_words.add(guess)
        logger.info(f"[GUESS] {guess!r} -> {proximity} ({len(self.guesses)} guesses)")

        if proximity == 100:
            if self.mode == CLASSIC:
                self._win()
                return True, f"Correct! The word was '{self.target_word}'.", proximity
            solved = self.target_word
            self._advance_target()
            return True, f"Correct! '{solved}' solved. Next word!", proximity

        if self.hints_enabled and len(self.guesses) % self.settings.hint_cadence == 0:
            self._reveal_hint()
        return True, f"{proximity}% close.", proximity

    def _win(self) -> None:
        self.is_won = True
        self.is_game_over = True
        self.end_time = time.time()
        logger.info(f"[GAME] Won in {len(self.guesses)} guesses, {self.elapsed_seconds():.1f}s")

    def _advance_target(self) -> None:
        solved = self.target_word
        words = get_word_list(self.category_id)
        candidates = [w for w in words if w != solved and w not in self._round_words]
        if not candidates:
            candidates = [w for w in words if w != solved] or words
        self.target_word = self.rng.choice(candidates)
        self.guesses.clear()
        self.revealed_hints.clear()
        self.current_hint = None
        self.words_guessed_count += 1
        logger.info(f"[SPEEDRUN] Word {self.words_guessed_count} solved; "
                    f"{self.time_remaining}s left, picked from {len(candidates)} candidates")

    def _reveal_hint(self) -> None:
        hint = generate_hint(self.target_word, self.category_id, self.revealed_hints,
                             rng=self.rng, attempts=self.settings.hint_attempts)
        if hint not in self.revealed_hints:
            self.revealed_hints.append(hint)
        self.current_hint = hint
        logger.info(f"[HINT] Hint {len(self.revealed_hints)} revealed after {len(self.guesses)} guesses")

    def tick(self) -> None:
        """Advance the speedrun countdown by one second."""
        if self.mode != SPEEDRUN or self.is_game_over:
            return
        self.time_remaining = max(0, self.time_remaining - 1)
        if self.time_remaining == 0:
            self.is_game_over = True
            self.end_time = time.time()
            logger.info(f"[SPEEDRUN] Time's up with {self.words_guessed_count} words guessed")

    def toggle_hints(self) -> bool:
        """Flip hint display; returns the new setting."""
        self.hints_enabled = not self.hints_enabled
        if self.hints_enabled:
            self.current_hint = self.revealed_hints[-1] if self.revealed_hints else None
        else:
            self.current_hint = None
        return self.hints_enabled

    def give_up(self) -> str:
        """End the session without a win and reveal the target word."""
        if not self.is_game_over:
            self.has_resigned = True
            self.is_game_over = True
            self.end_time = time.time()
            logger.info(f"[GAME] Player gave up after {len(self.guesses)} guesses")
        return self.target_word

    def elapsed_seconds(self) -> float:
        end_time = self.end_time if self.end_time is not None else time.time()
        return end_time - self.start_time

    def get_game_summary(self) -> Dict:
        """Get a summary of the game state."""
        best = self.guesses[0].proximity if self.guesses else 0
        return {
            "category_id": self.category_id,
            "mode": self.mode,
            "state": self.state.value,
            "target_word": self.target_word if self.is_game_over else None,
            "guesses": [record._asdict() for record in self.guesses],
            "guess_count": len(self.guesses),
            "best_proximity": best,
            "words_guessed_count": self.words_guessed_count,
            "time_remaining": self.time_remaining,
            "hints_enabled": self.hints_enabled,
            "current_hint": self.current_hint,
            "revealed_hints": list(self.revealed_hints),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": round(self.elapsed_seconds()),
            "game_over": self.is_game_over,
            "won": self.is_won,
            "resigned": self.has_resigned,
        }

    def to_leaderboard_entry(self, user_id: Optional[str] = None) -> Optional[Dict]:
        """
        Build the record handed to the leaderboard, or None if the session
        has nothing to record (still running, or given up).
        """
        state = self.state
        if state == SessionState.WON:
            score, time_seconds = 100, round(self.elapsed_seconds())
        elif state == SessionState.TIMED_OUT:
            score, time_seconds = self.words_guessed_count, self.time_limit_seconds
        else:
            return None
        return {
            "category_id": self.category_id,
            "mode": self.mode,
            "score": score,
            "time_seconds": time_seconds,
            "user_id": user_id,
        }


def new_session(category_id: str, mode: str = CLASSIC, **kwargs) -> GameSession:
    """Start a session with a random target from the category's word list."""
    return GameSession(category_id, mode, **kwargs)
