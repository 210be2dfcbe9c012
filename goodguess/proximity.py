"""
Proximity scoring.

Scores how close a guess is to the target on a 0-100 scale. The lexical part
compares letters, affixes and lengths; the semantic part adds bonuses when both
words have entries in the category's knowledge table. The per-category rules
are data (SCORING_PROFILES), so adding a category is a table change.
"""

import math
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, NamedTuple, Tuple

from .config import DEFAULT_LENGTH_PENALTY_CAP
from .semantic_data import SemanticEntry, get_semantic_table
from .word_validation import normalize_word

logger = logging.getLogger(__name__)

MIN_LEXICAL_SCORE = 5
MIN_SEMANTIC_SCORE = 3
PREFIX_POINTS, PREFIX_CAP = 2, 20
SUFFIX_POINTS, SUFFIX_CAP = 2, 15
FIRST_LETTER_BONUS = 5
LAST_LETTER_BONUS = 3
MAX_SCORE = 100


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_score(value: float) -> int:
    return _round_half_up(max(0.0, min(value, float(MAX_SCORE))))


def lexical_similarity(a: str, b: str, length_penalty_cap: int = DEFAULT_LENGTH_PENALTY_CAP) -> int:
    """
    Letter-based similarity between two strings.

    Combines multiset character overlap, a length-difference penalty and
    prefix/suffix bonuses. Any non-identical pair scores at least 5 before the
    first/last letter bonuses, so every guess shows a visible bar.
    """
    a = str(a).lower()
    b = str(b).lower()
    if a == b:
        return 100

    length_penalty = min(abs(len(a) - len(b)) * 5, length_penalty_cap)

    # Multiset intersection: each letter of b can be matched once
    remaining = list(b)
    common = 0
    for char in a:
        if char in remaining:
            common += 1
            remaining.remove(char)
    char_similarity = common / max(len(a), len(b)) * 100

    min_length = min(len(a), len(b))
    prefix_bonus = 0
    for i in range(min_length):
        if a[i] != b[i]:
            break
        prefix_bonus += PREFIX_POINTS
    suffix_bonus = 0
    for i in range(1, min_length + 1):
        if a[-i] != b[-i]:
            break
        suffix_bonus += SUFFIX_POINTS

    raw = (char_similarity - length_penalty
           + min(prefix_bonus, PREFIX_CAP) + min(suffix_bonus, SUFFIX_CAP))
    raw = max(raw, MIN_LEXICAL_SCORE)

    if a and b and a[0] == b[0]:
        raw += FIRST_LETTER_BONUS
    if a and b and a[-1] == b[-1]:
        raw += LAST_LETTER_BONUS
    return _clamp_score(raw)


class BonusKind(Enum):
    FLAT = "flat"    # fixed bonus on any shared value
    RATIO = "ratio"  # share of the target's values, capped


class PropertyRule(NamedTuple):
    name: str
    kind: BonusKind
    weight: float  # the flat bonus, or the cap for a ratio rule


class ScoringProfile(NamedTuple):
    primary: PropertyRule
    secondary: Tuple[PropertyRule, ...]
    related_bonus: int = 15
    participation_bonus: int = 5


SCORING_PROFILES: Dict[str, ScoringProfile] = {
    "food": ScoringProfile(
        primary=PropertyRule("country", BonusKind.FLAT, 20),
        secondary=(PropertyRule("ingredients", BonusKind.RATIO, 25),),
    ),
    "animals": ScoringProfile(
        primary=PropertyRule("species", BonusKind.FLAT, 20),
        secondary=(
            PropertyRule("habitat", BonusKind.RATIO, 20),
            PropertyRule("features", BonusKind.RATIO, 20),
        ),
    ),
    "countries": ScoringProfile(
        primary=PropertyRule("region", BonusKind.FLAT, 25),
        secondary=(
            PropertyRule("language", BonusKind.RATIO, 20),
            PropertyRule("features", BonusKind.RATIO, 15),
        ),
    ),
    "sports": ScoringProfile(
        primary=PropertyRule("type", BonusKind.FLAT, 25),
        secondary=(
            PropertyRule("equipment", BonusKind.RATIO, 20),
            PropertyRule("features", BonusKind.RATIO, 15),
        ),
    ),
    "movies": ScoringProfile(
        primary=PropertyRule("genre", BonusKind.FLAT, 25),
        secondary=(
            PropertyRule("director", BonusKind.FLAT, 30),
            PropertyRule("features", BonusKind.RATIO, 20),
        ),
    ),
}


def _property_bonus(rule: PropertyRule, guess: SemanticEntry, target: SemanticEntry) -> float:
    guess_values = guess.properties.get(rule.name, ())
    target_values = target.properties.get(rule.name, ())
    if not guess_values or not target_values:
        return 0.0
    matches = sum(1 for value in guess_values if value in target_values)
    if matches == 0:
        return 0.0
    if rule.kind is BonusKind.FLAT:
        return float(rule.weight)
    return min(matches / len(target_values) * 100, rule.weight)


def semantic_bonus(guess: SemanticEntry, target: SemanticEntry, profile: ScoringProfile) -> float:
    """Bonus points for two entries of the same category table."""
    if set(guess.related) & set(target.related):
        bonus = float(profile.related_bonus)
    else:
        bonus = float(profile.participation_bonus)
    bonus += _property_bonus(profile.primary, guess, target)
    for rule in profile.secondary:
        bonus += _property_bonus(rule, guess, target)
    return bonus


def semantic_similarity(guess: str, target: str, category_id: str,
                        length_penalty_cap: int = DEFAULT_LENGTH_PENALTY_CAP) -> int:
    """
    Category-aware proximity between a guess and the target.

    Identical words score exactly 100. Words without entries in the category's
    table get the lexical score.
    """
    guess = normalize_word(guess)
    target = normalize_word(target)
    if guess == target:
        return 100

    base = lexical_similarity(guess, target, length_penalty_cap)
    category_id = str(category_id).strip().lower()
    table = get_semantic_table(category_id)
    profile = SCORING_PROFILES.get(category_id)
    if table is None or profile is None:
        return max(base, MIN_SEMANTIC_SCORE)

    guess_entry = table.get(guess)
    target_entry = table.get(target)
    if guess_entry is None or target_entry is None:
        return max(base, MIN_SEMANTIC_SCORE)

    bonus = semantic_bonus(guess_entry, target_entry, profile)
    logger.debug(f"Semantic bonus {guess!r}->{target!r} in {category_id}: base={base} bonus={bonus:.1f}")
    return _clamp_score(base + bonus)


class Scorer(ABC):
    """Strategy interface: score(guess, target, category_id) -> int in [0, 100]."""

    name = "base"

    @abstractmethod
    def score(self, guess: str, target: str, category_id: str) -> int:
        ...


class LocalScorer(Scorer):
    """Deterministic scorer backed by the local knowledge tables."""

    name = "local"

    def __init__(self, length_penalty_cap: int = DEFAULT_LENGTH_PENALTY_CAP):
        self.length_penalty_cap = length_penalty_cap

    def score(self, guess: str, target: str, category_id: str) -> int:
        return semantic_similarity(guess, target, category_id, self.length_penalty_cap)


def make_scorer(settings=None) -> Scorer:
    """
    Build the scorer selected by configuration.

    The remote scorer is used only when enabled and an API key is present;
    it always keeps a LocalScorer as its fallback.
    """
    if settings is None:
        from .config import get_settings
        settings = get_settings()
    local = LocalScorer(settings.length_penalty_cap)
    if not settings.use_remote_scorer:
        return local
    if not settings.openrouter_api_key:
        logger.info("USE_REMOTE_SCORER is set but no OPENROUTER_API_KEY found. Using local scorer.")
        return local
    from .remote_scorer import RemoteScorer
    return RemoteScorer(
        api_key=settings.openrouter_api_key,
        model=settings.openrouter_model,
        url=settings.openrouter_url,
        timeout=settings.remote_timeout_s,
        max_attempts=settings.remote_max_attempts,
        fallback=local,
    )
